"""Shared httpx client for upstream 1inch calls.

One connection pool per process, created lazily and closed on shutdown.
Every request inherits UPSTREAM_TIMEOUT_SECONDS.
"""

import httpx

from config.settings import settings

_http_client: httpx.AsyncClient | None = None


async def get_http_client() -> httpx.AsyncClient:
    """Get or create the upstream HTTP client (also a FastAPI dependency)."""
    global _http_client  # noqa: PLW0603
    if _http_client is None or _http_client.is_closed:
        _http_client = httpx.AsyncClient(
            base_url=settings.ONEINCH_API_BASE_URL,
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
        )
    return _http_client


async def close_http_client() -> None:
    """Close the upstream HTTP client."""
    global _http_client  # noqa: PLW0603
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None
