# src/lo_price/api/router.py
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.lo_price.application import service as svc
from src.lo_price.application.schemas import PriceResponse
from src.lo_price.infrastructure.price_client import PriceClient, get_price_client

router = APIRouter(prefix="/price", tags=["price"])


@router.get("", response_model=PriceResponse)
async def get_price(
    client: Annotated[PriceClient, Depends(get_price_client)],
    base: str | None = Query(None, description="Base token address"),
    quote: str | None = Query(None, description="Quote token address"),
) -> PriceResponse:
    return await svc.get_price(base, quote, client)


@router.post("", response_model=PriceResponse)
async def get_default_price(
    client: Annotated[PriceClient, Depends(get_price_client)],
) -> PriceResponse:
    return await svc.get_default_price(client)
