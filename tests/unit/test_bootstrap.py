"""Tests for the client SDK wiring."""

from unittest.mock import MagicMock

from eth_account import Account

from config.settings import settings
from src.lo_client.bootstrap import create_trading_client, local_provider
from src.lo_client.orders.models import Order
from src.lo_client.price.cache import MemoryPriceCache
from src.lo_client.wallet.provider import LocalWalletProvider
from src.lo_client.wallet.session import SessionEvent
from src.lo_common.enums import SessionEventType

PRIVATE_KEY = "0x" + "33" * 32


def _order() -> Order:
    return Order(
        id="1-1",
        maker="0x0",
        maker_asset="0xa",
        taker_asset="0xb",
        making_amount="1",
        taking_amount="1",
        salt="1",
        expiration=0,
        signature="0x",
    )


class TestCreateTradingClient:
    def test_uses_settings(self) -> None:
        client = create_trading_client(None, proxy=MagicMock(), price_cache=MemoryPriceCache())

        assert client.wallet.network.chain_id == settings.TARGET_CHAIN_ID
        assert client.orders.builder.chain_id == settings.TARGET_CHAIN_ID
        assert client.orders.approval_timeout == settings.APPROVAL_TIMEOUT_SECONDS
        assert client.prices.reference_pair == (
            settings.DEFAULT_BASE_TOKEN,
            settings.DEFAULT_QUOTE_TOKEN,
        )
        assert client.prices.ttl_ms == settings.PRICE_CACHE_TTL_SECONDS * 1000

    def test_chain_change_wipes_orders(self) -> None:
        client = create_trading_client(None, proxy=MagicMock(), price_cache=MemoryPriceCache())
        client.orders.store.create(_order())

        client.wallet.apply_event(SessionEvent(SessionEventType.CHAIN_CHANGED, "0x1"))

        assert client.orders.store.active_orders == []


def test_local_provider_uses_key() -> None:
    provider = local_provider(PRIVATE_KEY, rpc_url="http://localhost:8545")
    assert isinstance(provider, LocalWalletProvider)
    assert provider.account.address == Account.from_key(PRIVATE_KEY).address
