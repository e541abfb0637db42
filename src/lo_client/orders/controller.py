"""Order workflow: create, cancel, refresh.

create_order runs strictly in sequence:
  build → ensure allowance (confirmed) → sign → submit → record locally.
Nothing reaches the orderbook without a confirmed allowance and a signature.
Concurrent create calls are not serialised against each other.
"""
import logging
from decimal import Decimal

from src.lo_client.orders.allowance import AllowanceGuard
from src.lo_client.orders.builder import OrderBuilder
from src.lo_client.orders.models import Order, Token
from src.lo_client.orders.state_store import OrderStateStore
from src.lo_client.proxy_client import ProxyClient
from src.lo_client.wallet.session import WalletSessionManager
from src.lo_common.datetime_utils import now_ms
from src.lo_common.enums import Expiration
from src.lo_common.id_generator import make_order_id

logger = logging.getLogger(__name__)


class OrderController:
    def __init__(
        self,
        wallet: WalletSessionManager,
        builder: OrderBuilder,
        proxy: ProxyClient,
        store: OrderStateStore,
        approval_timeout: float = 120.0,
        reconcile: bool = False,
    ) -> None:
        self.wallet = wallet
        self.builder = builder
        self.proxy = proxy
        self.store = store
        self.approval_timeout = approval_timeout
        # When set, every successful mutation re-reads the orderbook instead
        # of trusting the optimistic local update
        self.reconcile = reconcile
        self.is_loading = False

    def allowance_guard(self) -> AllowanceGuard:
        return AllowanceGuard(
            self.wallet.require_session(),
            self.builder.verifying_contract,
            timeout=self.approval_timeout,
        )

    async def create_order(
        self,
        pay_token: Token,
        receive_token: Token,
        amount: Decimal | str | int,
        price: Decimal | str | int,
        expiration: Expiration | str = Expiration.ONE_DAY,
    ) -> Order:
        session = self.wallet.require_session()
        self.is_loading = True
        try:
            built = self.builder.build(
                session.account, pay_token, receive_token, amount, price, expiration
            )
            logger.info(
                "Creating order %s: %s %s → %s %s",
                built.order_hash,
                built.order.making_amount,
                pay_token.symbol,
                built.order.taking_amount,
                receive_token.symbol,
            )
            await self.allowance_guard().ensure_allowance(
                pay_token.address, built.order.making_amount
            )
            signature = await session.sign_typed_data(built.typed_data)
            payload = {
                "orderHash": built.order_hash,
                "signature": signature,
                "data": built.order.to_api(),
            }
            result = await self.proxy.submit_order(payload)
            logger.info("Order %s submitted: %s", built.order_hash, result)

            created_at = now_ms()
            order = Order(
                id=make_order_id(built.order.salt, created_at),
                maker=session.account,
                maker_asset=built.order.maker_asset,
                taker_asset=built.order.taker_asset,
                making_amount=str(built.order.making_amount),
                taking_amount=str(built.order.taking_amount),
                salt=str(built.order.salt),
                expiration=built.expiration,
                signature=signature,
                created_at=created_at,
                order_hash=built.order_hash,
                maker_traits=str(built.order.maker_traits),
            )
            self.store.create(order)
        finally:
            self.is_loading = False
        if self.reconcile:
            await self.store.refresh(session.account)
        return order

    async def cancel_order(self, order_id: str) -> Order:
        """Local-only: see OrderStateStore.cancel."""
        session = self.wallet.require_session()
        order = self.store.cancel(order_id)
        logger.info("Order %s cancelled locally (no on-chain action)", order_id)
        if self.reconcile:
            await self.store.refresh(session.account)
        return order

    async def refresh_orders(self) -> bool:
        account = self.wallet.account
        if account is None:
            logger.warning("refresh_orders: no account connected")
            return False
        self.is_loading = True
        try:
            return await self.store.refresh(account)
        finally:
            self.is_loading = False
