"""1inch Orderbook API client: submit a signed order, list orders by maker."""
import logging
from typing import Annotated, Any

import httpx
from fastapi import Depends

from config.settings import settings
from src.lo_common.errors import InternalError, UpstreamApiError
from src.lo_common.http_client import get_http_client
from src.lo_common.upstream import UpstreamClient
from src.lo_gateway.auth.dependencies import require_api_key

logger = logging.getLogger(__name__)

ORDERBOOK_PATH = "/orderbook/v4.0"


class OrderbookClient(UpstreamClient):
    def __init__(self, http: httpx.AsyncClient, api_key: str, chain_id: int) -> None:
        super().__init__(http, api_key)
        self.chain_id = chain_id

    @property
    def base_path(self) -> str:
        return f"{ORDERBOOK_PATH}/{self.chain_id}"

    async def submit_order(self, payload: dict[str, Any]) -> Any:
        url = f"{self.base_path}/limit-order/order"
        response = await self._send("POST", url, json_body=payload)
        return self._unwrap(response)

    async def list_orders_by_maker(
        self, address: str, page: str, limit: str, sort_by: str
    ) -> Any:
        url = f"{self.base_path}/limit-order/order/maker/{address}"
        params = {"page": page, "limit": limit, "sortBy": sort_by}
        response = await self._send("GET", url, params=params)
        return self._unwrap(response)

    def _unwrap(self, response: httpx.Response) -> Any:
        if not response.is_success:
            body = response.text
            logger.error("1inch orderbook error: status=%d body=%s", response.status_code, body)
            raise UpstreamApiError(response.status_code, body)
        try:
            return response.json()
        except ValueError:
            logger.error("1inch orderbook returned non-JSON body: %r", response.text[:200])
            raise InternalError("upstream returned a non-JSON body") from None


async def get_orderbook_client(
    api_key: Annotated[str, Depends(require_api_key)],
    http: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> OrderbookClient:
    return OrderbookClient(http, api_key, settings.ORDERBOOK_CHAIN_ID)
