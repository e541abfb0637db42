"""Order builder: user intent → canonical v4 order, typed data and hash.

Pure data transformation, no network I/O. Amounts are scaled with exact
Decimal arithmetic and truncated toward zero:

  makingAmount = trunc(amount × 10^decimals(pay))
  takingAmount = trunc(amount × price × 10^decimals(receive))

e.g. 1.5 @ 2000 with 18/6 decimals → 1500000000000000000 / 3000000000.
"""
import time
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from eth_utils import is_address

from src.lo_client.orders.eip712 import build_typed_data, compute_order_hash
from src.lo_client.orders.models import LimitOrderData, Token
from src.lo_client.orders.traits import MakerTraits
from src.lo_client.wallet.networks import limit_order_contract
from src.lo_common.enums import Expiration
from src.lo_common.errors import InvalidOrderInputError
from src.lo_common.id_generator import generate_salt
from src.lo_common.units import mul_to_base_units, to_base_units, to_decimal


@dataclass(frozen=True)
class BuiltOrder:
    order: LimitOrderData
    typed_data: dict[str, Any]
    order_hash: str
    expiration: int


class OrderBuilder:
    def __init__(
        self,
        chain_id: int,
        verifying_contract: str | None = None,
        clock: Callable[[], float] = time.time,
        salt_factory: Callable[[], int] = generate_salt,
    ) -> None:
        self.chain_id = chain_id
        self.verifying_contract = verifying_contract or limit_order_contract(chain_id)
        self._clock = clock
        self._salt_factory = salt_factory

    def expiration_timestamp(self, choice: Expiration | str) -> int:
        try:
            offset = Expiration(choice).seconds
        except ValueError:
            raise InvalidOrderInputError(f"Unknown expiration: {choice}") from None
        return int(self._clock()) + offset

    def build(
        self,
        maker: str,
        pay_token: Token,
        receive_token: Token,
        amount: Decimal | str | int,
        price: Decimal | str | int,
        expiration: Expiration | str = Expiration.ONE_DAY,
    ) -> BuiltOrder:
        if not is_address(maker):
            raise InvalidOrderInputError(f"Invalid maker address: {maker}")
        if pay_token.address.lower() == receive_token.address.lower():
            raise InvalidOrderInputError("Pay and receive tokens must differ")
        try:
            amount_dec = to_decimal(amount)
            price_dec = to_decimal(price)
        except ValueError as exc:
            raise InvalidOrderInputError(str(exc)) from None
        if amount_dec <= 0:
            raise InvalidOrderInputError("Amount must be greater than 0")
        if price_dec <= 0:
            raise InvalidOrderInputError("Price must be greater than 0")

        making_amount = to_base_units(amount_dec, pay_token.decimals)
        taking_amount = mul_to_base_units(amount_dec, price_dec, receive_token.decimals)
        if making_amount <= 0 or taking_amount <= 0:
            raise InvalidOrderInputError("Amount too small for token precision")

        expires_at = self.expiration_timestamp(expiration)
        traits = (
            MakerTraits()
            .with_expiration(expires_at)
            .allow_partial_fills()
            .allow_multiple_fills()
        )
        order = LimitOrderData(
            salt=self._salt_factory(),
            maker=maker,
            receiver=maker,
            maker_asset=pay_token.address,
            taker_asset=receive_token.address,
            making_amount=making_amount,
            taking_amount=taking_amount,
            maker_traits=traits.as_int(),
        )
        return BuiltOrder(
            order=order,
            typed_data=build_typed_data(order, self.chain_id, self.verifying_contract),
            order_hash=compute_order_hash(order, self.chain_id, self.verifying_contract),
            expiration=expires_at,
        )
