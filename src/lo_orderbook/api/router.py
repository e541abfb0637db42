# src/lo_orderbook/api/router.py
import json
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request

from src.lo_common.errors import InternalError
from src.lo_gateway.auth.dependencies import require_api_key
from src.lo_orderbook.application import service as svc
from src.lo_orderbook.application.schemas import CancelOrderResponse
from src.lo_orderbook.infrastructure.orderbook_client import (
    OrderbookClient,
    get_orderbook_client,
)

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("")
async def submit_order(
    request: Request,
    client: Annotated[OrderbookClient, Depends(get_orderbook_client)],
) -> Any:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InternalError(f"malformed request body: {exc}") from None
    return await svc.submit_order(body, client)


@router.get("")
async def list_orders(
    client: Annotated[OrderbookClient, Depends(get_orderbook_client)],
    address: str | None = Query(None, description="Maker address"),
    page: str | None = Query(None, description="Page number (default 1)"),
    limit: str | None = Query(None, description="Items per page (default 50)"),
    sort_by: str | None = Query(None, alias="sortBy", description="Sort key (default createDateTime)"),
) -> Any:
    return await svc.list_orders(address, page, limit, sort_by, client)


@router.delete("", response_model=CancelOrderResponse, response_model_by_alias=True)
async def cancel_order(
    _api_key: Annotated[str, Depends(require_api_key)],
    order_hash: str | None = Query(None, alias="orderHash", description="Order hash"),
) -> CancelOrderResponse:
    return await svc.cancel_order(order_hash)
