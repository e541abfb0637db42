"""Tests for WalletSessionManager and WalletSession (scripted provider)."""

import asyncio
import json
from typing import Any

import pytest

from src.lo_client.orders.builder import OrderBuilder
from src.lo_client.orders.models import Token
from src.lo_client.wallet.networks import POLYGON
from src.lo_client.wallet.provider import EventEmitter, ProviderRpcError
from src.lo_client.wallet.session import SessionEvent, WalletSession, WalletSessionManager
from src.lo_common.enums import SessionEventType
from src.lo_common.errors import (
    NetworkSwitchError,
    ProviderNotFoundError,
    WalletError,
    WalletNotConnectedError,
)

ALICE = "0x2c7536e3605d9c16a7a3d7b1898e529396a65c23"
BOB = "0x7ceb23fd6bc0add59e62ac25578270cff1b9f619"
USDC = "0x3c499c542cef5e3811e1192ce70d8cc03d5c3359"


class ScriptedProvider(EventEmitter):
    """Answers from a method → value map; exceptions in the map are raised."""

    def __init__(self, script: dict[str, Any] | None = None) -> None:
        super().__init__()
        self.script = {"eth_requestAccounts": [ALICE], **(script or {})}
        self.calls: list[tuple[str, list[Any]]] = []

    async def request(self, method: str, params: list[Any] | None = None) -> Any:
        self.calls.append((method, params or []))
        result = self.script.get(method)
        if isinstance(result, Exception):
            raise result
        return result

    def methods(self) -> list[str]:
        return [m for m, _ in self.calls]


class TestConnect:
    async def test_switches_then_requests_accounts(self) -> None:
        provider = ScriptedProvider()
        manager = WalletSessionManager(provider, POLYGON)

        session = await manager.connect()

        assert provider.methods() == ["wallet_switchEthereumChain", "eth_requestAccounts"]
        assert provider.calls[0][1] == [{"chainId": "0x89"}]
        assert session.chain_id == 137
        assert manager.is_connected
        assert manager.account == session.account
        assert session.account.lower() == ALICE
        assert not manager.is_connecting

    async def test_adds_chain_when_unknown(self) -> None:
        provider = ScriptedProvider(
            {"wallet_switchEthereumChain": ProviderRpcError(4902, "Unrecognized chain")}
        )
        manager = WalletSessionManager(provider, POLYGON)

        await manager.connect()

        assert provider.methods()[:2] == ["wallet_switchEthereumChain", "wallet_addEthereumChain"]
        params = provider.calls[1][1][0]
        assert params["chainId"] == "0x89"
        assert params["nativeCurrency"]["symbol"] == "MATIC"

    async def test_switch_rejected(self) -> None:
        provider = ScriptedProvider(
            {"wallet_switchEthereumChain": ProviderRpcError(4001, "User rejected")}
        )
        manager = WalletSessionManager(provider, POLYGON)

        with pytest.raises(NetworkSwitchError, match="Failed to switch to Polygon Mainnet"):
            await manager.connect()
        assert not manager.is_connected
        assert not manager.is_connecting

    async def test_add_chain_rejected(self) -> None:
        provider = ScriptedProvider(
            {
                "wallet_switchEthereumChain": ProviderRpcError(4902, "Unrecognized chain"),
                "wallet_addEthereumChain": ProviderRpcError(4001, "User rejected"),
            }
        )
        with pytest.raises(NetworkSwitchError, match="Failed to add"):
            await WalletSessionManager(provider, POLYGON).connect()

    async def test_accounts_rejected(self) -> None:
        provider = ScriptedProvider(
            {"eth_requestAccounts": ProviderRpcError(4001, "User rejected the request.")}
        )
        with pytest.raises(WalletError, match="User rejected the request."):
            await WalletSessionManager(provider, POLYGON).connect()

    async def test_no_accounts(self) -> None:
        provider = ScriptedProvider({"eth_requestAccounts": []})
        with pytest.raises(WalletError):
            await WalletSessionManager(provider, POLYGON).connect()

    async def test_no_provider(self) -> None:
        manager = WalletSessionManager(None)
        with pytest.raises(ProviderNotFoundError):
            await manager.connect()

    async def test_disconnect_is_local(self) -> None:
        provider = ScriptedProvider()
        manager = WalletSessionManager(provider, POLYGON)
        await manager.connect()
        calls_before = len(provider.calls)

        manager.disconnect()

        assert not manager.is_connected
        assert len(provider.calls) == calls_before
        with pytest.raises(WalletNotConnectedError):
            manager.require_session()


class TestWalletSession:
    async def test_sign_typed_data_sends_json(self) -> None:
        provider = ScriptedProvider({"eth_signTypedData_v4": "0xsig"})
        session = WalletSession(provider, ALICE, 137)

        assert await session.sign_typed_data({"primaryType": "Order"}) == "0xsig"
        method, params = provider.calls[0]
        assert method == "eth_signTypedData_v4"
        assert params[0] == session.account
        assert json.loads(params[1]) == {"primaryType": "Order"}

    async def test_order_payload_survives_double_precision_parsing(self) -> None:
        provider = ScriptedProvider({"eth_signTypedData_v4": "0xsig"})
        session = WalletSession(provider, ALICE, 137)
        built = OrderBuilder(137, clock=lambda: 1_700_000_000).build(
            ALICE, Token("WETH", BOB, 18), Token("USDC", USDC, 6), "1.5", "2000"
        )

        await session.sign_typed_data(built.typed_data)

        wire = provider.calls[0][1][1]
        # how a JavaScript wallet reads it
        as_doubles = json.loads(wire, parse_int=float)
        assert as_doubles == json.loads(wire)
        message = as_doubles["message"]
        assert message["makerTraits"] == str(built.order.maker_traits)
        assert built.order.maker_traits > 2**53
        assert message["salt"] == str(built.order.salt)

    async def test_provider_error_message_is_verbatim(self) -> None:
        provider = ScriptedProvider(
            {"eth_signTypedData_v4": ProviderRpcError(4001, "User denied message signature")}
        )
        session = WalletSession(provider, ALICE, 137)
        with pytest.raises(WalletError) as exc_info:
            await session.sign_typed_data({})
        assert exc_info.value.message == "User denied message signature"

    async def test_send_transaction_shape(self) -> None:
        provider = ScriptedProvider({"eth_sendTransaction": "0xtx"})
        session = WalletSession(provider, ALICE, 137)

        assert await session.send_transaction(BOB, "0xdead") == "0xtx"
        tx = provider.calls[0][1][0]
        assert tx == {"from": session.account, "to": BOB, "data": "0xdead", "value": "0x0"}


class TestEvents:
    async def _connected(self) -> tuple[ScriptedProvider, WalletSessionManager]:
        provider = ScriptedProvider()
        manager = WalletSessionManager(provider, POLYGON)
        await manager.connect()
        return provider, manager

    async def test_empty_accounts_disconnects(self) -> None:
        _, manager = await self._connected()
        manager.apply_event(SessionEvent(SessionEventType.ACCOUNTS_CHANGED, []))
        assert not manager.is_connected

    async def test_new_account_rebinds_session(self) -> None:
        _, manager = await self._connected()
        manager.apply_event(SessionEvent(SessionEventType.ACCOUNTS_CHANGED, [BOB]))
        assert manager.account is not None
        assert manager.account.lower() == BOB
        assert manager.require_session().chain_id == 137

    async def test_chain_change_resets_everything(self) -> None:
        _, manager = await self._connected()
        wiped: list[str] = []
        manager.add_reset_hook(lambda: wiped.append("orders"))

        manager.apply_event(SessionEvent(SessionEventType.CHAIN_CHANGED, "0x1"))

        assert not manager.is_connected
        assert wiped == ["orders"]

    async def test_events_iterator_subscribes_and_unsubscribes(self) -> None:
        provider, manager = await self._connected()
        events = manager.events()

        pending = asyncio.ensure_future(events.__anext__())
        await asyncio.sleep(0)
        assert provider.listener_count("accountsChanged") == 1
        assert provider.listener_count("chainChanged") == 1

        provider.emit("chainChanged", "0x1")
        event = await asyncio.wait_for(pending, timeout=1)
        assert event == SessionEvent(SessionEventType.CHAIN_CHANGED, "0x1")

        await events.aclose()
        assert provider.listener_count("accountsChanged") == 0
        assert provider.listener_count("chainChanged") == 0

    async def test_watch_applies_events(self) -> None:
        provider, manager = await self._connected()
        task = asyncio.create_task(manager.watch())
        await asyncio.sleep(0)

        provider.emit("accountsChanged", [])
        await asyncio.sleep(0)
        await asyncio.sleep(0)

        assert not manager.is_connected
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
