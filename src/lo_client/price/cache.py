"""Local price cache keyed by "base_quote".

Entries are {"price": str, "timestamp": ms}. Freshness is decided by the
caller; the store only keeps the last value per pair.
"""
import json
import logging
from pathlib import Path
from typing import Protocol

from src.lo_price.application.schemas import PriceResponse

logger = logging.getLogger(__name__)


def cache_key(base: str, quote: str) -> str:
    return f"{base.lower()}_{quote.lower()}"


class PriceCache(Protocol):
    def get(self, key: str) -> PriceResponse | None: ...

    def set(self, key: str, value: PriceResponse) -> None: ...


class MemoryPriceCache:
    def __init__(self) -> None:
        self._entries: dict[str, PriceResponse] = {}

    def get(self, key: str) -> PriceResponse | None:
        return self._entries.get(key)

    def set(self, key: str, value: PriceResponse) -> None:
        self._entries[key] = value


class JsonFilePriceCache:
    """Survives restarts, like browser local storage. A corrupt file reads as empty."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> dict[str, dict]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable price cache %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> PriceResponse | None:
        entry = self._load().get(key)
        if not isinstance(entry, dict):
            return None
        try:
            return PriceResponse.model_validate(entry)
        except ValueError:
            return None

    def set(self, key: str, value: PriceResponse) -> None:
        data = self._load()
        data[key] = value.model_dump()
        self.path.write_text(json.dumps(data), encoding="utf-8")
