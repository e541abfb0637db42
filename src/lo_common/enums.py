"""Global enums shared by the proxy routes and the client SDK."""

from enum import Enum


class OrderStatus(str, Enum):
    """Lifecycle of a client-visible order. Transitions are one-way out of ACTIVE."""
    ACTIVE = "active"
    FILLED = "filled"
    CANCELLED = "cancelled"
    EXPIRED = "expired"

    @classmethod
    def from_api(cls, value: str | None) -> "OrderStatus":
        """Map an upstream status string; anything unrecognised counts as active."""
        for status in (cls.FILLED, cls.CANCELLED, cls.EXPIRED):
            if value == status.value:
                return status
        return cls.ACTIVE


class Expiration(str, Enum):
    ONE_HOUR = "1h"
    ONE_DAY = "1d"
    ONE_WEEK = "1w"
    ONE_MONTH = "1m"
    ONE_YEAR = "1y"

    @property
    def seconds(self) -> int:
        return _EXPIRATION_SECONDS[self]


_EXPIRATION_SECONDS = {
    Expiration.ONE_HOUR: 3600,
    Expiration.ONE_DAY: 86400,
    Expiration.ONE_WEEK: 604800,
    Expiration.ONE_MONTH: 2592000,  # 30 days
    Expiration.ONE_YEAR: 31536000,
}


class SessionEventType(str, Enum):
    ACCOUNTS_CHANGED = "accountsChanged"
    CHAIN_CHANGED = "chainChanged"
