"""Base class for 1inch upstream clients.

Owns the bearer credential and turns transport failures into AppErrors so
no httpx exception ever escapes a proxy route. One attempt per call, no
retry.
"""

import logging
from typing import Any

import httpx

from src.lo_common.errors import InternalError, UpstreamTimeoutError

logger = logging.getLogger(__name__)


class UpstreamClient:
    def __init__(self, http: httpx.AsyncClient, api_key: str) -> None:
        self._http = http
        self._api_key = api_key

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "accept": "application/json",
        }

    async def _send(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, str] | None = None,
        json_body: Any = None,
    ) -> httpx.Response:
        logger.info("Upstream %s %s params=%s", method, url, params)
        try:
            return await self._http.request(
                method, url, params=params, json=json_body, headers=self._headers()
            )
        except httpx.TimeoutException as exc:
            logger.error("Upstream %s %s timed out: %s", method, url, exc)
            raise UpstreamTimeoutError() from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error("Upstream %s %s failed: %s", method, url, exc)
            raise InternalError(str(exc) or type(exc).__name__) from exc
