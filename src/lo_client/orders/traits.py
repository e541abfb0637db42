"""MakerTraits: the packed uint256 of v4 order behaviour flags.

Layout (bit 0 = least significant):
  255      NO_PARTIAL_FILLS
  254      ALLOW_MULTIPLE_FILLS
  252      PRE_INTERACTION_CALL
  251      POST_INTERACTION_CALL
  250      NEED_CHECK_EPOCH_MANAGER
  249      HAS_EXTENSION
  248      USE_PERMIT2
  247      UNWRAP_WETH
  160-199  series      (40 bits)
  120-159  nonce/epoch (40 bits)
   80-119  expiration  (40 bits, unix seconds, 0 = never)
    0-79   low 80 bits of the allowed sender (0 = anyone)
"""

NO_PARTIAL_FILLS_FLAG = 255
ALLOW_MULTIPLE_FILLS_FLAG = 254
PRE_INTERACTION_CALL_FLAG = 252
POST_INTERACTION_CALL_FLAG = 251
NEED_CHECK_EPOCH_MANAGER_FLAG = 250
HAS_EXTENSION_FLAG = 249
USE_PERMIT2_FLAG = 248
UNWRAP_WETH_FLAG = 247

_ALLOWED_SENDER_MASK = (1 << 80) - 1
_UINT40_MAX = (1 << 40) - 1
_EXPIRATION_SHIFT = 80
_NONCE_SHIFT = 120
_SERIES_SHIFT = 160


class MakerTraits:
    """Chainable builder over the packed integer.

    MakerTraits().with_expiration(ts).allow_partial_fills().allow_multiple_fills()
    """

    def __init__(self, value: int = 0) -> None:
        if value < 0 or value >= 1 << 256:
            raise ValueError("MakerTraits must fit in uint256")
        self.value = value

    @classmethod
    def parse(cls, raw: str | int) -> "MakerTraits":
        """Accept 0x-hex or decimal, as the orderbook API may return either."""
        if isinstance(raw, int):
            return cls(raw)
        raw = raw.strip()
        return cls(int(raw, 16) if raw.lower().startswith("0x") else int(raw))

    def _get_bit(self, bit: int) -> bool:
        return bool(self.value >> bit & 1)

    def _set_bit(self, bit: int, on: bool) -> "MakerTraits":
        if on:
            self.value |= 1 << bit
        else:
            self.value &= ~(1 << bit)
        return self

    def _get_field(self, shift: int) -> int:
        return self.value >> shift & _UINT40_MAX

    def _set_field(self, shift: int, field: int, name: str) -> "MakerTraits":
        if field < 0 or field > _UINT40_MAX:
            raise ValueError(f"{name} must fit in 40 bits, got {field}")
        self.value = self.value & ~(_UINT40_MAX << shift) | field << shift
        return self

    # --- fields ---

    @property
    def expiration(self) -> int | None:
        """Unix seconds, or None when the order never expires."""
        return self._get_field(_EXPIRATION_SHIFT) or None

    def with_expiration(self, expiration: int) -> "MakerTraits":
        return self._set_field(_EXPIRATION_SHIFT, expiration, "expiration")

    @property
    def nonce_or_epoch(self) -> int:
        return self._get_field(_NONCE_SHIFT)

    def with_nonce(self, nonce: int) -> "MakerTraits":
        return self._set_field(_NONCE_SHIFT, nonce, "nonce")

    @property
    def series(self) -> int:
        return self._get_field(_SERIES_SHIFT)

    def allowed_sender(self) -> int:
        return self.value & _ALLOWED_SENDER_MASK

    def with_allowed_sender(self, address: str) -> "MakerTraits":
        low = int(address, 16) & _ALLOWED_SENDER_MASK
        self.value = self.value & ~_ALLOWED_SENDER_MASK | low
        return self

    # --- flags ---

    @property
    def is_partial_fill_allowed(self) -> bool:
        return not self._get_bit(NO_PARTIAL_FILLS_FLAG)

    def allow_partial_fills(self) -> "MakerTraits":
        return self._set_bit(NO_PARTIAL_FILLS_FLAG, False)

    def disable_partial_fills(self) -> "MakerTraits":
        return self._set_bit(NO_PARTIAL_FILLS_FLAG, True)

    @property
    def is_multiple_fills_allowed(self) -> bool:
        return self._get_bit(ALLOW_MULTIPLE_FILLS_FLAG)

    def allow_multiple_fills(self) -> "MakerTraits":
        return self._set_bit(ALLOW_MULTIPLE_FILLS_FLAG, True)

    def disable_multiple_fills(self) -> "MakerTraits":
        return self._set_bit(ALLOW_MULTIPLE_FILLS_FLAG, False)

    @property
    def has_extension(self) -> bool:
        return self._get_bit(HAS_EXTENSION_FLAG)

    def as_int(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, MakerTraits) and other.value == self.value

    def __hash__(self) -> int:
        return hash(self.value)
