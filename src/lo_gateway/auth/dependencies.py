"""FastAPI dependency: require_api_key.

Usage in any proxy router:
    from src.lo_gateway.auth.dependencies import require_api_key

    @router.get("/proxied")
    async def proxied(api_key: str = Depends(require_api_key)):
        ...

The 1inch bearer credential lives server-side only; it is never accepted
from, or returned to, the caller.
"""

from config.settings import settings
from src.lo_common.errors import ApiKeyNotConfiguredError


async def require_api_key() -> str:
    """Return the configured 1inch API key.

    Raises HTTP 500 (ApiKeyNotConfiguredError) when it is missing, which
    short-circuits the route before any upstream call.
    """
    api_key = settings.ONEINCH_API_KEY
    if not api_key:
        raise ApiKeyNotConfiguredError()
    return api_key
