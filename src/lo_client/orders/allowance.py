"""ERC-20 allowance guard for the limit order protocol contract.

Before an order is signed the protocol must be allowed to pull the maker
asset. ensure_allowance() reads the current allowance and, only when it is
short, approves exactly the required amount and waits for the receipt.
Any failure on this path surfaces as ApprovalFailedError.
"""
import asyncio
import logging
import time

from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_abi.exceptions import DecodingError
from eth_utils import function_signature_to_4byte_selector, to_checksum_address

from src.lo_client.wallet.provider import to_int
from src.lo_client.wallet.session import WalletSession
from src.lo_common.errors import ApprovalFailedError, WalletError

logger = logging.getLogger(__name__)

ALLOWANCE_SELECTOR = function_signature_to_4byte_selector("allowance(address,address)")
APPROVE_SELECTOR = function_signature_to_4byte_selector("approve(address,uint256)")


def encode_allowance_call(owner: str, spender: str) -> str:
    args = abi_encode(["address", "address"], [to_checksum_address(owner), to_checksum_address(spender)])
    return "0x" + (ALLOWANCE_SELECTOR + args).hex()


def encode_approve_call(spender: str, amount: int) -> str:
    args = abi_encode(["address", "uint256"], [to_checksum_address(spender), amount])
    return "0x" + (APPROVE_SELECTOR + args).hex()


class AllowanceGuard:
    def __init__(
        self,
        session: WalletSession,
        spender: str,
        poll_interval: float = 1.0,
        timeout: float = 120.0,
    ) -> None:
        self.session = session
        self.spender = to_checksum_address(spender)
        self.poll_interval = poll_interval
        self.timeout = timeout

    async def current_allowance(self, token: str) -> int:
        raw = await self.session.call(
            to_checksum_address(token), encode_allowance_call(self.session.account, self.spender)
        )
        (allowance,) = abi_decode(["uint256"], bytes.fromhex(raw.removeprefix("0x")))
        return int(allowance)

    async def ensure_allowance(self, token: str, required: int) -> str | None:
        """Return the approval tx hash, or None when the allowance already suffices."""
        try:
            current = await self.current_allowance(token)
            logger.info("Allowance for %s: current=%d required=%d", token, current, required)
            if current >= required:
                return None
            tx_hash = await self.session.send_transaction(
                to_checksum_address(token), encode_approve_call(self.spender, required)
            )
            logger.info("Approval transaction sent: %s", tx_hash)
            await self._wait_for_receipt(tx_hash)
        except WalletError as exc:
            logger.error("Token approval failed for %s: %s", token, exc.message)
            raise ApprovalFailedError(exc.message) from exc
        except (DecodingError, ValueError) as exc:
            logger.error("Token approval failed for %s: %s", token, exc)
            raise ApprovalFailedError(str(exc)) from exc
        logger.info("Token approval confirmed: %s", tx_hash)
        return tx_hash

    async def _wait_for_receipt(self, tx_hash: str) -> None:
        deadline = time.monotonic() + self.timeout
        while True:
            receipt = await self.session.get_transaction_receipt(tx_hash)
            if receipt is not None:
                if to_int(receipt.get("status", 0)) != 1:
                    raise ApprovalFailedError(f"approval transaction {tx_hash} reverted")
                return
            if time.monotonic() >= deadline:
                raise ApprovalFailedError(
                    f"approval transaction {tx_hash} not confirmed within {self.timeout:.0f}s"
                )
            await asyncio.sleep(self.poll_interval)
