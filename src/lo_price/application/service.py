# src/lo_price/application/service.py
import logging

from config.settings import settings
from src.lo_common.addresses import require_hex_address
from src.lo_common.datetime_utils import now_ms
from src.lo_price.application.schemas import PriceResponse
from src.lo_price.domain.pricing import derive_price
from src.lo_price.infrastructure.price_client import PriceClient

logger = logging.getLogger(__name__)


def resolve_pair(base: str | None, quote: str | None) -> tuple[str, str]:
    """Fill in the default pair, check and lowercase both addresses."""
    return (
        require_hex_address("base", base or settings.DEFAULT_BASE_TOKEN).lower(),
        require_hex_address("quote", quote or settings.DEFAULT_QUOTE_TOKEN).lower(),
    )


async def get_price(base: str | None, quote: str | None, client: PriceClient) -> PriceResponse:
    base_addr, quote_addr = resolve_pair(base, quote)
    data = await client.get_prices([base_addr, quote_addr])
    price = derive_price(data, base_addr, quote_addr)
    logger.info("Price %s/%s = %s", base_addr, quote_addr, price)
    return PriceResponse(price=price, timestamp=now_ms())


async def get_default_price(client: PriceClient) -> PriceResponse:
    """Default pair through the upstream POST form."""
    base_addr, quote_addr = resolve_pair(None, None)
    data = await client.post_prices([settings.DEFAULT_BASE_TOKEN, settings.DEFAULT_QUOTE_TOKEN])
    price = derive_price(data, base_addr, quote_addr)
    logger.info("Default price %s/%s = %s", base_addr, quote_addr, price)
    return PriceResponse(price=price, timestamp=now_ms())
