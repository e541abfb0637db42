"""Wallet session: one connected account on the target chain.

WalletSessionManager owns the single session and is the only writer of
it. Components that need to sign or transact receive the WalletSession
explicitly instead of reading shared global state.

Provider notifications are consumed as an async iterator (events()); each
call subscribes afresh, and closing the iterator unsubscribes.
"""
import asyncio
import json
import logging
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass
from typing import Any

from eth_utils import to_checksum_address

from src.lo_client.wallet.networks import POLYGON, Network
from src.lo_client.wallet.provider import UNRECOGNIZED_CHAIN, ProviderRpcError, WalletProvider
from src.lo_common.enums import SessionEventType
from src.lo_common.errors import (
    NetworkSwitchError,
    ProviderNotFoundError,
    WalletError,
    WalletNotConnectedError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionEvent:
    type: SessionEventType
    payload: Any


class WalletSession:
    """Signer bound to one account. Provider errors surface with their message verbatim."""

    def __init__(self, provider: WalletProvider, account: str, chain_id: int) -> None:
        self.provider = provider
        self.account = to_checksum_address(account)
        self.chain_id = chain_id

    async def _request(self, method: str, params: list[Any]) -> Any:
        try:
            return await self.provider.request(method, params)
        except ProviderRpcError as exc:
            raise WalletError(exc.message) from exc

    async def sign_typed_data(self, typed_data: dict[str, Any]) -> str:
        return await self._request(
            "eth_signTypedData_v4", [self.account, json.dumps(typed_data)]
        )

    async def call(self, to: str, data: str) -> str:
        return await self._request("eth_call", [{"to": to, "data": data}, "latest"])

    async def send_transaction(self, to: str, data: str, value: int = 0) -> str:
        tx = {"from": self.account, "to": to, "data": data, "value": hex(value)}
        return await self._request("eth_sendTransaction", [tx])

    async def get_transaction_receipt(self, tx_hash: str) -> dict[str, Any] | None:
        return await self._request("eth_getTransactionReceipt", [tx_hash])


class WalletSessionManager:
    def __init__(self, provider: WalletProvider | None, network: Network = POLYGON) -> None:
        self._provider = provider
        self.network = network
        self.session: WalletSession | None = None
        self.is_connecting = False
        self._reset_hooks: list[Callable[[], None]] = []

    @property
    def is_connected(self) -> bool:
        return self.session is not None

    @property
    def account(self) -> str | None:
        return self.session.account if self.session else None

    def require_session(self) -> WalletSession:
        if self.session is None:
            raise WalletNotConnectedError()
        return self.session

    def add_reset_hook(self, hook: Callable[[], None]) -> None:
        """Register state to wipe when the wallet changes chain."""
        self._reset_hooks.append(hook)

    def _require_provider(self) -> WalletProvider:
        if self._provider is None:
            raise ProviderNotFoundError()
        return self._provider

    async def switch_network(self) -> None:
        """Switch the wallet to the target chain, adding it first if unknown."""
        provider = self._require_provider()
        try:
            await provider.request(
                "wallet_switchEthereumChain", [{"chainId": self.network.hex_chain_id}]
            )
        except ProviderRpcError as switch_error:
            if switch_error.code != UNRECOGNIZED_CHAIN:
                logger.error("Failed to switch to %s: %s", self.network.chain_name, switch_error)
                raise NetworkSwitchError(
                    f"Failed to switch to {self.network.chain_name} network"
                ) from switch_error
            try:
                await provider.request(
                    "wallet_addEthereumChain", [self.network.to_add_chain_params()]
                )
            except ProviderRpcError as add_error:
                logger.error("Failed to add %s: %s", self.network.chain_name, add_error)
                raise NetworkSwitchError(
                    f"Failed to add {self.network.chain_name} network to wallet"
                ) from add_error

    async def connect(self) -> WalletSession:
        provider = self._require_provider()
        self.is_connecting = True
        try:
            await self.switch_network()
            try:
                accounts = await provider.request("eth_requestAccounts", [])
            except ProviderRpcError as exc:
                raise WalletError(exc.message) from exc
            if not accounts:
                raise WalletError("Wallet returned no accounts")
            self.session = WalletSession(provider, accounts[0], self.network.chain_id)
            logger.info("Wallet connected: %s on chain %d", self.session.account, self.network.chain_id)
            return self.session
        finally:
            self.is_connecting = False

    def disconnect(self) -> None:
        """Forget the local session. Nothing happens on-chain."""
        if self.session is not None:
            logger.info("Wallet disconnected: %s", self.session.account)
        self.session = None

    async def events(self) -> AsyncIterator[SessionEvent]:
        provider = self._require_provider()
        queue: asyncio.Queue[SessionEvent] = asyncio.Queue()
        listeners = {
            event_type: self._enqueue(queue, event_type) for event_type in SessionEventType
        }
        for event_type, listener in listeners.items():
            provider.on(event_type.value, listener)
        try:
            while True:
                yield await queue.get()
        finally:
            for event_type, listener in listeners.items():
                provider.remove_listener(event_type.value, listener)

    @staticmethod
    def _enqueue(
        queue: "asyncio.Queue[SessionEvent]", event_type: SessionEventType
    ) -> Callable[[Any], None]:
        def listener(payload: Any) -> None:
            queue.put_nowait(SessionEvent(event_type, payload))

        return listener

    def apply_event(self, event: SessionEvent) -> None:
        if event.type is SessionEventType.ACCOUNTS_CHANGED:
            accounts = event.payload or []
            if not accounts:
                self.disconnect()
            elif self.session is not None:
                self.session = WalletSession(self.session.provider, accounts[0], self.session.chain_id)
                logger.info("Wallet account changed: %s", self.session.account)
        elif event.type is SessionEventType.CHAIN_CHANGED:
            # Coarse recovery: drop the session and every piece of derived state
            logger.info("Wallet chain changed to %s; resetting session", event.payload)
            self.disconnect()
            for hook in self._reset_hooks:
                hook()

    async def watch(self) -> None:
        """Apply provider events until cancelled."""
        async for event in self.events():
            self.apply_event(event)
