"""In-memory order state: the active set and the history set.

Every order id lives in exactly one of the two. Nothing is persisted
beyond the process.
"""
import logging
from typing import Any

from src.lo_client.orders.models import Order
from src.lo_client.proxy_client import ProxyClient
from src.lo_common.enums import OrderStatus
from src.lo_common.errors import AppError, OrderNotFoundError

logger = logging.getLogger(__name__)

REFRESH_LIMIT = 100


class OrderStateStore:
    def __init__(self, proxy: ProxyClient) -> None:
        self._proxy = proxy
        self._active: dict[str, Order] = {}
        self._history: dict[str, Order] = {}

    @property
    def active_orders(self) -> list[Order]:
        return list(self._active.values())

    @property
    def order_history(self) -> list[Order]:
        return list(self._history.values())

    def get(self, order_id: str) -> Order | None:
        return self._active.get(order_id) or self._history.get(order_id)

    def clear(self) -> None:
        self._active.clear()
        self._history.clear()

    def replace_all(self, orders: list[Order]) -> None:
        self._active = {o.id: o for o in orders if o.is_active}
        self._history = {o.id: o for o in orders if not o.is_active}

    async def refresh(self, address: str) -> bool:
        """Replace both sets from the query proxy.

        On failure the previous state is kept and False is returned.
        """
        try:
            response: Any = await self._proxy.list_orders(address, limit=REFRESH_LIMIT)
        except AppError as exc:
            logger.warning("Failed to refresh orders for %s: %s", address, exc.message)
            return False
        if not isinstance(response, list):
            logger.warning("Unexpected orders payload for %s: %r", address, type(response))
            return False
        try:
            orders = [Order.from_api(item) for item in response if isinstance(item, dict)]
        except (ValueError, TypeError, AttributeError) as exc:
            # one malformed entry rejects the whole snapshot
            logger.warning("Malformed order entry for %s: %s", address, exc)
            return False
        self.replace_all(orders)
        logger.info(
            "Refreshed orders for %s: %d active, %d history",
            address,
            len(self._active),
            len(self._history),
        )
        return True

    def create(self, order: Order) -> None:
        """Record an order the submission proxy has already acknowledged."""
        self._history.pop(order.id, None)
        if order.is_active:
            self._active[order.id] = order
        else:
            self._history[order.id] = order

    def cancel(self, order_id: str) -> Order:
        """Local-only cancellation: move active → history as cancelled.

        No on-chain cancellation is sent, so a later refresh may bring the
        order back while the orderbook still reports it active.
        """
        order = self._active.pop(order_id, None)
        if order is None:
            raise OrderNotFoundError(order_id)
        cancelled = order.with_status(OrderStatus.CANCELLED)
        self._history[order_id] = cancelled
        return cancelled
