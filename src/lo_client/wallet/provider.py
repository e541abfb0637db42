"""Wallet provider surface (EIP-1193 style) and a local signing implementation.

A browser wallet injects an object with request()/on()/removeListener().
WalletProvider describes that surface; LocalWalletProvider implements it
with a private key (eth-account) and a JSON-RPC node (web3 AsyncWeb3) so the
client SDK runs without a browser.
"""
import json
import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any, Protocol

from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address, to_hex
from web3 import AsyncWeb3
from web3.exceptions import TransactionNotFound, Web3Exception

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]

# EIP-1193 / MetaMask error codes
USER_REJECTED = 4001
UNSUPPORTED_METHOD = 4200
UNRECOGNIZED_CHAIN = 4902
INTERNAL_RPC_ERROR = -32603


class ProviderRpcError(Exception):
    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


class WalletProvider(Protocol):
    async def request(self, method: str, params: list[Any] | None = None) -> Any: ...

    def on(self, event: str, listener: Listener) -> None: ...

    def remove_listener(self, event: str, listener: Listener) -> None: ...


class EventEmitter:
    """on/remove_listener/emit bookkeeping shared by provider implementations."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def on(self, event: str, listener: Listener) -> None:
        self._listeners[event].append(listener)

    def remove_listener(self, event: str, listener: Listener) -> None:
        if listener in self._listeners[event]:
            self._listeners[event].remove(listener)

    def listener_count(self, event: str) -> int:
        return len(self._listeners[event])

    def emit(self, event: str, payload: Any) -> None:
        for listener in list(self._listeners[event]):
            listener(payload)


def to_int(value: Any) -> int:
    """JSON-RPC quantities arrive as hex strings; accept ints too."""
    if isinstance(value, str):
        return int(value, 16) if value.startswith("0x") else int(value)
    return int(value or 0)


class LocalWalletProvider(EventEmitter):
    """Signs with a local key, reads and broadcasts through an RPC node.

    A local signer cannot add networks, so wallet_switchEthereumChain only
    succeeds when the node already serves the requested chain.
    """

    def __init__(self, account: LocalAccount, w3: AsyncWeb3) -> None:
        super().__init__()
        self.account = account
        self.w3 = w3
        self._chain_id: int | None = None

    async def _current_chain_id(self) -> int:
        if self._chain_id is None:
            self._chain_id = int(await self.w3.eth.chain_id)
        return self._chain_id

    async def request(self, method: str, params: list[Any] | None = None) -> Any:
        params = params or []
        handler = self._handlers().get(method)
        if handler is None:
            raise ProviderRpcError(UNSUPPORTED_METHOD, f"Unsupported method: {method}")
        try:
            return await handler(params)
        except (Web3Exception, ValueError) as exc:
            logger.error("RPC %s failed: %s", method, exc)
            raise ProviderRpcError(INTERNAL_RPC_ERROR, str(exc)) from exc

    def _handlers(self) -> dict[str, Callable[[list[Any]], Any]]:
        return {
            "eth_requestAccounts": self._accounts,
            "eth_accounts": self._accounts,
            "eth_chainId": self._chain_id_hex,
            "wallet_switchEthereumChain": self._switch_chain,
            "wallet_addEthereumChain": self._add_chain,
            "eth_signTypedData_v4": self._sign_typed_data,
            "eth_call": self._call,
            "eth_sendTransaction": self._send_transaction,
            "eth_getTransactionReceipt": self._get_receipt,
        }

    async def _accounts(self, params: list[Any]) -> list[str]:
        return [self.account.address]

    async def _chain_id_hex(self, params: list[Any]) -> str:
        return hex(await self._current_chain_id())

    async def _switch_chain(self, params: list[Any]) -> None:
        wanted = to_int(params[0]["chainId"])
        node_chain = int(await self.w3.eth.chain_id)
        if wanted != node_chain:
            raise ProviderRpcError(UNRECOGNIZED_CHAIN, f"Unrecognized chain ID {hex(wanted)}")
        previous, self._chain_id = self._chain_id, wanted
        if previous is not None and previous != wanted:
            self.emit("chainChanged", hex(wanted))
        return None

    async def _add_chain(self, params: list[Any]) -> None:
        raise ProviderRpcError(
            USER_REJECTED, "Local signer cannot add networks; point RPC_URL at the target chain"
        )

    async def _sign_typed_data(self, params: list[Any]) -> str:
        address, payload = params[0], params[1]
        if to_checksum_address(address) != self.account.address:
            raise ProviderRpcError(USER_REJECTED, f"Unknown signer {address}")
        typed_data = json.loads(payload) if isinstance(payload, str) else payload
        signed = self.account.sign_typed_data(full_message=typed_data)
        return to_hex(signed.signature)

    async def _call(self, params: list[Any]) -> str:
        tx = params[0]
        result = await self.w3.eth.call(
            {"to": to_checksum_address(tx["to"]), "data": tx["data"]}
        )
        return to_hex(result)

    async def _send_transaction(self, params: list[Any]) -> str:
        tx = params[0]
        sender = self.account.address
        if "from" in tx and to_checksum_address(tx["from"]) != sender:
            raise ProviderRpcError(USER_REJECTED, f"Unknown sender {tx['from']}")
        prepared: dict[str, Any] = {
            "from": sender,
            "to": to_checksum_address(tx["to"]),
            "data": tx.get("data", "0x"),
            "value": to_int(tx.get("value", 0)),
            "chainId": await self._current_chain_id(),
            "nonce": await self.w3.eth.get_transaction_count(sender, "pending"),
            "gasPrice": await self.w3.eth.gas_price,
        }
        prepared["gas"] = to_int(tx["gas"]) if "gas" in tx else await self.w3.eth.estimate_gas(prepared)
        signed = self.account.sign_transaction(prepared)
        tx_hash = await self.w3.eth.send_raw_transaction(signed.raw_transaction)
        logger.info("Broadcast transaction %s from %s", to_hex(tx_hash), sender)
        return to_hex(tx_hash)

    async def _get_receipt(self, params: list[Any]) -> dict[str, Any] | None:
        try:
            receipt = await self.w3.eth.get_transaction_receipt(params[0])
        except TransactionNotFound:
            return None
        return dict(receipt)
