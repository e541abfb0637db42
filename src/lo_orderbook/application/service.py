# src/lo_orderbook/application/service.py
"""Order proxy use cases: validate once at ingress, forward once upstream."""
import logging
from typing import Any

from pydantic import ValidationError

from src.lo_common.addresses import require_hex_address
from src.lo_common.errors import (
    InternalError,
    InvalidFieldError,
    MissingFieldError,
    MissingOrderFieldError,
    MissingQueryParameterError,
)
from src.lo_orderbook.application.schemas import (
    REQUIRED_ORDER_FIELDS,
    REQUIRED_PAYLOAD_FIELDS,
    CancelOrderResponse,
    SubmitOrderRequest,
)
from src.lo_orderbook.infrastructure.orderbook_client import OrderbookClient

logger = logging.getLogger(__name__)

DEFAULT_PAGE = "1"
DEFAULT_LIMIT = "50"
DEFAULT_SORT_BY = "createDateTime"

CANCELLATION_MESSAGE = "Order cancellation requires on-chain transaction"


def parse_submission(body: Any) -> SubmitOrderRequest:
    """Validate a raw submission body, naming the first missing field."""
    if not isinstance(body, dict):
        raise InternalError("request body must be a JSON object")
    for field in REQUIRED_PAYLOAD_FIELDS:
        if field not in body:
            raise MissingFieldError(field)
    data = body["data"]
    if not isinstance(data, dict):
        raise InvalidFieldError("data", "must be an object")
    for field in REQUIRED_ORDER_FIELDS:
        if field not in data:
            raise MissingOrderFieldError(field)
    try:
        return SubmitOrderRequest.model_validate(
            {"orderHash": body["orderHash"], "signature": body["signature"], "data": data}
        )
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = ".".join(str(part) for part in first["loc"])
        raise InvalidFieldError(loc, first["msg"]) from None


async def submit_order(body: Any, client: OrderbookClient) -> Any:
    req = parse_submission(body)
    logger.info(
        "Submitting order %s from maker %s to chain %d",
        req.order_hash,
        req.data.maker,
        client.chain_id,
    )
    result = await client.submit_order(req.to_upstream())
    logger.info("Order %s accepted upstream", req.order_hash)
    return result


async def list_orders(
    address: str | None,
    page: str | None,
    limit: str | None,
    sort_by: str | None,
    client: OrderbookClient,
) -> Any:
    if not address:
        raise MissingQueryParameterError("Address parameter is required")
    return await client.list_orders_by_maker(
        require_hex_address("maker", address),
        page or DEFAULT_PAGE,
        limit or DEFAULT_LIMIT,
        sort_by or DEFAULT_SORT_BY,
    )


async def cancel_order(order_hash: str | None) -> CancelOrderResponse:
    """Placeholder: real cancellation is an on-chain transaction signed by the maker."""
    if not order_hash:
        raise MissingQueryParameterError("Order hash parameter is required")
    logger.info("Cancellation requested for %s (no on-chain action taken)", order_hash)
    return CancelOrderResponse(message=CANCELLATION_MESSAGE, order_hash=order_hash)
