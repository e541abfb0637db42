"""Client-side order records: pure dataclasses, no I/O."""
from dataclasses import dataclass, field, replace
from typing import Any

from eth_utils import to_checksum_address

from src.lo_client.orders.traits import MakerTraits
from src.lo_client.wallet.networks import ZERO_ADDRESS
from src.lo_common.datetime_utils import now_ms, parse_timestamp_ms
from src.lo_common.enums import OrderStatus
from src.lo_common.id_generator import make_order_id


@dataclass(frozen=True)
class Token:
    symbol: str
    address: str
    decimals: int


@dataclass(frozen=True)
class LimitOrderData:
    """Canonical v4 order fields, exactly what the maker signs.

    Frozen: once a signature exists, any change would invalidate it.
    """
    salt: int
    maker: str
    receiver: str
    maker_asset: str
    taker_asset: str
    making_amount: int
    taking_amount: int
    maker_traits: int

    def __post_init__(self) -> None:
        if self.making_amount <= 0 or self.taking_amount <= 0:
            raise ValueError("makingAmount and takingAmount must be positive")
        if self.maker_asset.lower() == self.taker_asset.lower():
            raise ValueError("makerAsset and takerAsset must differ")
        for name in ("maker", "receiver", "maker_asset", "taker_asset"):
            object.__setattr__(self, name, to_checksum_address(getattr(self, name)))

    def to_message(self) -> dict[str, str]:
        """EIP-712 message values. uint256 fields are decimal strings (JSON numbers above 2**53 are lossy)."""
        return {
            "salt": str(self.salt),
            "maker": self.maker,
            "receiver": self.receiver,
            "makerAsset": self.maker_asset,
            "takerAsset": self.taker_asset,
            "makingAmount": str(self.making_amount),
            "takingAmount": str(self.taking_amount),
            "makerTraits": str(self.maker_traits),
        }

    def to_api(self) -> dict[str, str]:
        """Orderbook API representation, same field set as the signed message."""
        return dict(self.to_message())


@dataclass
class Order:
    id: str
    maker: str
    maker_asset: str
    taker_asset: str
    making_amount: str  # smallest units, decimal string
    taking_amount: str
    salt: str
    expiration: int  # unix seconds, 0 = none
    signature: str
    status: OrderStatus = OrderStatus.ACTIVE
    taker: str = ZERO_ADDRESS
    created_at: int = field(default_factory=now_ms)
    order_hash: str | None = None
    maker_traits: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status is OrderStatus.ACTIVE

    def with_status(self, status: OrderStatus) -> "Order":
        if self.status is not OrderStatus.ACTIVE and status is not self.status:
            raise ValueError(f"Order {self.id} is {self.status.value}; status is final")
        return replace(self, status=status)

    @classmethod
    def from_api(cls, api_order: dict[str, Any]) -> "Order":
        """Map one entry of the orderbook 'orders by maker' response."""
        data = api_order.get("data") or {}
        created_at = parse_timestamp_ms(api_order.get("createDateTime"), default=now_ms())
        salt = str(data.get("salt") or "0")
        maker_traits = data.get("makerTraits")
        expiration = data.get("expiration")
        if expiration is None and maker_traits:
            expiration = MakerTraits.parse(maker_traits).expiration
        return cls(
            id=make_order_id(data.get("salt") or "unknown", created_at),
            maker=data.get("maker") or "",
            taker=data.get("taker") or ZERO_ADDRESS,
            maker_asset=data.get("makerAsset") or "",
            taker_asset=data.get("takerAsset") or "",
            making_amount=str(data.get("makingAmount") or "0"),
            taking_amount=str(data.get("takingAmount") or "0"),
            salt=salt,
            expiration=int(expiration or 0),
            signature=api_order.get("signature") or "",
            status=OrderStatus.from_api(api_order.get("status")),
            created_at=created_at,
            order_hash=api_order.get("orderHash"),
            maker_traits=str(maker_traits) if maker_traits is not None else None,
        )
