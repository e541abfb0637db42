"""Price derivation from a 1inch spot-price response.

The upstream returns {token_address: price} with per-token quotes in the
chain's native unit. base/quote = price[base] / price[quote]. Keys are
matched case-insensitively. A missing, non-numeric or non-positive quote
fails closed rather than producing Infinity or NaN.
"""
from decimal import Decimal, InvalidOperation, localcontext
from typing import Any

from src.lo_common.errors import PriceNotFoundError


def lookup_price(data: dict[str, Any], token: str) -> Decimal | None:
    wanted = token.lower()
    for key, value in data.items():
        if key.lower() == wanted:
            try:
                price = Decimal(str(value))
            except InvalidOperation:
                return None
            return price if price.is_finite() else None
    return None


def derive_price(data: Any, base: str, quote: str) -> str:
    """Return base/quote as a plain decimal string, e.g. '3500.12'."""
    if not isinstance(data, dict):
        raise PriceNotFoundError()
    base_price = lookup_price(data, base)
    quote_price = lookup_price(data, quote)
    if base_price is None or quote_price is None or quote_price <= 0 or base_price < 0:
        raise PriceNotFoundError()
    with localcontext() as ctx:
        ctx.prec = 28
        price = base_price / quote_price
    return format(price, "f")
