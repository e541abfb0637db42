"""Client-side price fetcher with a time-boxed cache and a background poller.

fetch_price() serves a cached quote younger than the TTL (24h by default)
unless force=True. A separate poller refreshes one reference pair every
interval regardless of what the user has selected.
"""
import asyncio
import contextlib
import logging
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from src.lo_client.price.cache import PriceCache, cache_key
from src.lo_client.proxy_client import ProxyClient
from src.lo_common.datetime_utils import now_ms
from src.lo_common.errors import AppError, UpstreamBadResponseError
from src.lo_price.application.schemas import PriceResponse

logger = logging.getLogger(__name__)

DAY_MS = 24 * 60 * 60 * 1000


def parse_price(data: Any) -> PriceResponse:
    if not isinstance(data, dict) or not data.get("price"):
        raise UpstreamBadResponseError("Invalid price data received")
    try:
        return PriceResponse.model_validate(data)
    except ValidationError:
        raise UpstreamBadResponseError("Invalid price data received") from None


class PriceFetcher:
    def __init__(
        self,
        proxy: ProxyClient,
        cache: PriceCache,
        reference_pair: tuple[str, str],
        ttl_ms: int = DAY_MS,
        refresh_interval: float = 30.0,
        clock_ms: Callable[[], int] = now_ms,
    ) -> None:
        self._proxy = proxy
        self._cache = cache
        self.reference_pair = reference_pair
        self.ttl_ms = ttl_ms
        self.refresh_interval = refresh_interval
        self._clock_ms = clock_ms
        # Display state
        self.current: PriceResponse | None = None
        self.reference: PriceResponse | None = None
        self.error: str | None = None
        self.is_loading = False
        self._poller: asyncio.Task[None] | None = None

    def _is_fresh(self, entry: PriceResponse) -> bool:
        return self._clock_ms() - entry.timestamp < self.ttl_ms

    async def fetch_price(self, base: str, quote: str, force: bool = False) -> PriceResponse:
        key = cache_key(base, quote)
        if not force:
            cached = self._cache.get(key)
            if cached is not None and self._is_fresh(cached):
                self.current = cached
                return cached

        self.is_loading = True
        self.error = None
        try:
            result = parse_price(await self._proxy.get_price(base, quote))
        except AppError as exc:
            self.error = exc.message
            logger.error("Price fetch %s failed: %s", key, exc.message)
            raise
        finally:
            self.is_loading = False

        self.current = result
        self._cache.set(key, result)
        return result

    async def refresh_reference(self) -> PriceResponse | None:
        base, quote = self.reference_pair
        try:
            self.reference = parse_price(await self._proxy.get_price(base, quote))
        except AppError as exc:
            self.error = exc.message
            logger.warning("Reference price refresh failed: %s", self.error)
            return None
        return self.reference

    async def _poll(self) -> None:
        while True:
            await self.refresh_reference()
            await asyncio.sleep(self.refresh_interval)

    def start(self) -> None:
        if self._poller is None or self._poller.done():
            self._poller = asyncio.create_task(self._poll())

    async def stop(self) -> None:
        if self._poller is not None:
            self._poller.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._poller
            self._poller = None
