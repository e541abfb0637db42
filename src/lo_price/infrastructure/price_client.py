"""1inch Spot Price API client."""
import logging
from typing import Annotated, Any

import httpx
from fastapi import Depends

from config.settings import settings
from src.lo_common.errors import (
    InvalidApiKeyError,
    RateLimitError,
    UpstreamBadResponseError,
)
from src.lo_common.http_client import get_http_client
from src.lo_common.upstream import UpstreamClient
from src.lo_gateway.auth.dependencies import require_api_key

logger = logging.getLogger(__name__)

PRICE_PATH = "/price/v1.1"


class PriceClient(UpstreamClient):
    def __init__(self, http: httpx.AsyncClient, api_key: str, chain_id: int) -> None:
        super().__init__(http, api_key)
        self.chain_id = chain_id

    async def get_prices(self, tokens: list[str]) -> Any:
        url = f"{PRICE_PATH}/{self.chain_id}/{','.join(tokens)}"
        response = await self._send("GET", url)
        return self._unwrap(response)

    async def post_prices(self, tokens: list[str]) -> Any:
        url = f"{PRICE_PATH}/{self.chain_id}"
        response = await self._send("POST", url, json_body={"tokens": tokens})
        return self._unwrap(response)

    def _unwrap(self, response: httpx.Response) -> Any:
        if not response.is_success:
            logger.error(
                "1inch price error: status=%d body=%s", response.status_code, response.text
            )
            if response.status_code == 401:
                raise InvalidApiKeyError()
            if response.status_code == 429:
                raise RateLimitError()
            # Everything else is reported as a bad gateway
            raise UpstreamBadResponseError(
                f"1inch API error: {response.status_code} - {response.text}"
            )
        try:
            return response.json()
        except ValueError:
            raise UpstreamBadResponseError("1inch API returned a non-JSON body") from None


async def get_price_client(
    api_key: Annotated[str, Depends(require_api_key)],
    http: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> PriceClient:
    return PriceClient(http, api_key, settings.PRICE_CHAIN_ID)
