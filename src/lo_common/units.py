"""Exact token-amount arithmetic.

On-chain amounts are ints in the token's smallest unit. Human input is
parsed as Decimal, never float, and scaled with truncation toward zero so
a maker never signs for more than the displayed amount.
"""

from decimal import ROUND_DOWN, Decimal, InvalidOperation, localcontext

# Enough significant digits for uint256 (78 digits) plus fractional input
_PRECISION = 100


def to_decimal(value: Decimal | str | int | float) -> Decimal:
    """Parse a human amount; floats go through str() so 1.1 stays 1.1."""
    if isinstance(value, Decimal):
        return value
    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Not a decimal number: {value!r}") from None
    if not parsed.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return parsed


def to_base_units(amount: Decimal | str | int | float, decimals: int) -> int:
    """Scale a human amount to smallest-unit int: 1.5 with 18 decimals -> 1500000000000000000."""
    if decimals < 0:
        raise ValueError(f"decimals must be >= 0, got {decimals}")
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        scaled = to_decimal(amount).scaleb(decimals)
        return int(scaled.to_integral_value(rounding=ROUND_DOWN))


def mul_to_base_units(
    amount: Decimal | str | int | float,
    price: Decimal | str | int | float,
    decimals: int,
) -> int:
    """amount * price scaled to smallest units, multiplied exactly before truncation."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        product = to_decimal(amount) * to_decimal(price)
    return to_base_units(product, decimals)


def from_base_units(units: int | str, decimals: int) -> Decimal:
    """Inverse of to_base_units for display: 3000000000 with 6 decimals -> Decimal('3000')."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return Decimal(int(units)).scaleb(-decimals)


def format_address(address: str) -> str:
    """Shorten an address for display: 0x1234...abcd."""
    return f"{address[:6]}...{address[-4:]}"
