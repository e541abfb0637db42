"""Wire the client SDK from settings.

    client = create_trading_client(provider)
    await client.wallet.connect()
    await client.orders.create_order(weth, usdc, "1.5", "2000", "1d")
"""
from dataclasses import dataclass

from eth_account import Account
from web3 import AsyncHTTPProvider, AsyncWeb3

from config.settings import settings
from src.lo_client.orders.builder import OrderBuilder
from src.lo_client.orders.controller import OrderController
from src.lo_client.orders.state_store import OrderStateStore
from src.lo_client.price.cache import JsonFilePriceCache, PriceCache
from src.lo_client.price.fetcher import PriceFetcher
from src.lo_client.proxy_client import ProxyClient
from src.lo_client.wallet.networks import get_network
from src.lo_client.wallet.provider import LocalWalletProvider, WalletProvider
from src.lo_client.wallet.session import WalletSessionManager


@dataclass
class TradingClient:
    wallet: WalletSessionManager
    orders: OrderController
    prices: PriceFetcher
    proxy: ProxyClient

    async def close(self) -> None:
        await self.prices.stop()
        await self.proxy.close()


def local_provider(private_key: str, rpc_url: str | None = None) -> LocalWalletProvider:
    w3 = AsyncWeb3(AsyncHTTPProvider(rpc_url or settings.RPC_URL))
    return LocalWalletProvider(Account.from_key(private_key), w3)


def create_trading_client(
    provider: WalletProvider | None,
    proxy: ProxyClient | None = None,
    price_cache: PriceCache | None = None,
) -> TradingClient:
    network = get_network(settings.TARGET_CHAIN_ID)
    proxy = proxy or ProxyClient.from_base_url(
        settings.PROXY_BASE_URL, timeout=settings.UPSTREAM_TIMEOUT_SECONDS
    )
    wallet = WalletSessionManager(provider, network)
    store = OrderStateStore(proxy)
    orders = OrderController(
        wallet,
        OrderBuilder(network.chain_id),
        proxy,
        store,
        approval_timeout=settings.APPROVAL_TIMEOUT_SECONDS,
    )
    prices = PriceFetcher(
        proxy,
        price_cache or JsonFilePriceCache(settings.PRICE_CACHE_PATH),
        reference_pair=(settings.DEFAULT_BASE_TOKEN, settings.DEFAULT_QUOTE_TOKEN),
        ttl_ms=settings.PRICE_CACHE_TTL_SECONDS * 1000,
        refresh_interval=settings.PRICE_REFRESH_INTERVAL_SECONDS,
    )
    wallet.add_reset_hook(store.clear)
    return TradingClient(wallet=wallet, orders=orders, prices=prices, proxy=proxy)
