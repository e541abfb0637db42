"""Chain descriptors and 1inch Limit Order Protocol v4 deployments."""
from dataclasses import dataclass, field
from typing import Any

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Same address on every chain except zkSync
LIMIT_ORDER_V4_CONTRACT = "0x111111125421cA6dc452d289314280a0f8842A65"
LIMIT_ORDER_V4_ZKSYNC_CONTRACT = "0x6fd4383cb451173d5f9304f041c7bcbf27d561ff"
ZKSYNC_CHAIN_ID = 324


@dataclass(frozen=True)
class NativeCurrency:
    name: str
    symbol: str
    decimals: int = 18


@dataclass(frozen=True)
class Network:
    chain_id: int
    chain_name: str
    native_currency: NativeCurrency
    rpc_urls: list[str] = field(default_factory=list)
    block_explorer_urls: list[str] = field(default_factory=list)

    @property
    def hex_chain_id(self) -> str:
        return hex(self.chain_id)

    def to_add_chain_params(self) -> dict[str, Any]:
        """wallet_addEthereumChain parameter object."""
        return {
            "chainId": self.hex_chain_id,
            "chainName": self.chain_name,
            "nativeCurrency": {
                "name": self.native_currency.name,
                "symbol": self.native_currency.symbol,
                "decimals": self.native_currency.decimals,
            },
            "rpcUrls": list(self.rpc_urls),
            "blockExplorerUrls": list(self.block_explorer_urls),
        }


POLYGON = Network(
    chain_id=137,
    chain_name="Polygon Mainnet",
    native_currency=NativeCurrency(name="MATIC", symbol="MATIC"),
    rpc_urls=["https://polygon-rpc.com"],
    block_explorer_urls=["https://polygonscan.com"],
)

ETHEREUM = Network(
    chain_id=1,
    chain_name="Ethereum Mainnet",
    native_currency=NativeCurrency(name="Ether", symbol="ETH"),
    rpc_urls=["https://cloudflare-eth.com"],
    block_explorer_urls=["https://etherscan.io"],
)

NETWORKS = {n.chain_id: n for n in (POLYGON, ETHEREUM)}


def get_network(chain_id: int) -> Network:
    try:
        return NETWORKS[chain_id]
    except KeyError:
        raise ValueError(f"Unsupported chain id: {chain_id}") from None


def limit_order_contract(chain_id: int) -> str:
    if chain_id == ZKSYNC_CHAIN_ID:
        return LIMIT_ORDER_V4_ZKSYNC_CONTRACT
    return LIMIT_ORDER_V4_CONTRACT
