# src/lo_price/application/schemas.py
from pydantic import BaseModel


class PriceResponse(BaseModel):
    price: str  # decimal string, never float
    timestamp: int  # epoch ms
