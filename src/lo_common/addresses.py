"""Address checks for values that end up inside an upstream URL path."""

from eth_utils import is_hex_address

from src.lo_common.errors import InvalidAddressError


def require_hex_address(name: str, value: str) -> str:
    """Return value if it is 0x plus 40 hex digits; raise InvalidAddressError otherwise.

    Checksum case is not enforced, the upstream accepts any case.
    """
    if not (value.startswith("0x") and is_hex_address(value)):
        raise InvalidAddressError(name, value)
    return value
