"""Salt and local order-id generation.

The salt makes otherwise-identical orders distinct. Orders without an
extension may use any uint256 salt; the 1inch SDK draws 96 random bits,
leaving the low 160 bits free for an extension hash, and so do we.
"""

import secrets

SALT_BITS = 96


def generate_salt() -> int:
    """Random 96-bit salt from the OS CSPRNG."""
    return secrets.randbits(SALT_BITS)


def make_order_id(salt: int | str, created_at_ms: int) -> str:
    """Local order id: not the on-chain identifier, only unique per session."""
    return f"{salt}-{created_at_ms}"
