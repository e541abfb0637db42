# src/lo_orderbook/application/schemas.py
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Checked in this order; the first absent one is reported
REQUIRED_PAYLOAD_FIELDS = ("orderHash", "signature", "data")
REQUIRED_ORDER_FIELDS = (
    "makerAsset",
    "takerAsset",
    "makingAmount",
    "takingAmount",
    "maker",
    "receiver",
    "salt",
    "makerTraits",
)


class OrderData(BaseModel):
    """v4 limit order fields as the orderbook API expects them: all strings."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    maker_asset: str = Field(alias="makerAsset")
    taker_asset: str = Field(alias="takerAsset")
    making_amount: str = Field(alias="makingAmount")
    taking_amount: str = Field(alias="takingAmount")
    maker: str
    receiver: str
    salt: str
    maker_traits: str = Field(alias="makerTraits")
    extension: str | None = None

    @field_validator(
        "making_amount", "taking_amount", "salt", "maker_traits", mode="before"
    )
    @classmethod
    def int_to_str(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class SubmitOrderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order_hash: str = Field(alias="orderHash")
    signature: str
    data: OrderData

    def to_upstream(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class CancelOrderResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    order_hash: str = Field(alias="orderHash")
