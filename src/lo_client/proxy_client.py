"""Async HTTP client for this service's own proxy routes (/api/...)."""
import logging
from typing import Any

import httpx

from src.lo_common.errors import ProxyRequestError, UpstreamTimeoutError

logger = logging.getLogger(__name__)


class ProxyClient:
    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http

    @classmethod
    def from_base_url(cls, base_url: str, timeout: float = 15.0) -> "ProxyClient":
        return cls(httpx.AsyncClient(base_url=base_url, timeout=timeout))

    async def close(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        try:
            response = await self._http.request(method, path, params=params, json=json)
        except httpx.TimeoutException as exc:
            raise UpstreamTimeoutError() from exc
        except httpx.HTTPError as exc:
            raise ProxyRequestError(503, f"Proxy unreachable: {exc}") from exc
        if not response.is_success:
            try:
                message = response.json().get("message") or f"HTTP {response.status_code}"
            except (ValueError, AttributeError):
                message = f"HTTP {response.status_code}"
            logger.warning("%s %s → %d: %s", method, path, response.status_code, message)
            raise ProxyRequestError(response.status_code, message)
        try:
            return response.json()
        except ValueError:
            logger.warning("%s %s returned a non-JSON body: %r", method, path, response.text[:200])
            raise ProxyRequestError(502, "Proxy returned a non-JSON body") from None

    async def submit_order(self, payload: dict[str, Any]) -> Any:
        return await self._request("POST", "/api/orders", json=payload)

    async def list_orders(
        self,
        address: str,
        page: int | None = None,
        limit: int | None = None,
        sort_by: str | None = None,
    ) -> Any:
        params: dict[str, Any] = {"address": address}
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        if sort_by is not None:
            params["sortBy"] = sort_by
        return await self._request("GET", "/api/orders", params=params)

    async def get_price(self, base: str, quote: str) -> dict[str, Any]:
        return await self._request("GET", "/api/price", params={"base": base, "quote": quote})

    async def test_env(self) -> dict[str, Any]:
        response = await self._http.get("/api/test-env")
        try:
            return response.json()
        except ValueError:
            raise ProxyRequestError(response.status_code, "Proxy returned a non-JSON body") from None
