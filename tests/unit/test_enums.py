"""Tests for lo_common.enums."""

import pytest

from src.lo_common.enums import Expiration, OrderStatus, SessionEventType


class TestOrderStatus:
    def test_values(self) -> None:
        assert OrderStatus.ACTIVE == "active"
        assert OrderStatus.CANCELLED == "cancelled"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("filled", OrderStatus.FILLED),
            ("cancelled", OrderStatus.CANCELLED),
            ("expired", OrderStatus.EXPIRED),
            ("active", OrderStatus.ACTIVE),
            ("partially-filled", OrderStatus.ACTIVE),
            (None, OrderStatus.ACTIVE),
        ],
    )
    def test_from_api(self, raw: str | None, expected: OrderStatus) -> None:
        assert OrderStatus.from_api(raw) is expected


class TestExpiration:
    @pytest.mark.parametrize(
        ("choice", "seconds"),
        [("1h", 3600), ("1d", 86400), ("1w", 604800), ("1m", 2592000), ("1y", 31536000)],
    )
    def test_seconds(self, choice: str, seconds: int) -> None:
        assert Expiration(choice).seconds == seconds

    def test_unknown_choice(self) -> None:
        with pytest.raises(ValueError):
            Expiration("2d")


def test_session_event_names() -> None:
    assert SessionEventType.ACCOUNTS_CHANGED.value == "accountsChanged"
    assert SessionEventType.CHAIN_CHANGED.value == "chainChanged"
