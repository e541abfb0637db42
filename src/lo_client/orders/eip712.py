"""EIP-712 typed data and order hash for 1inch Limit Order Protocol v4.

orderHash = keccak256(0x19 0x01 ‖ domainSeparator ‖ hashStruct(order)), with
the domain bound to the chain id and the protocol contract. Identical
inputs always give the same hash; changing any field changes it.
"""
from typing import Any

from eth_abi import encode as abi_encode
from eth_utils import keccak, to_checksum_address

from src.lo_client.orders.models import LimitOrderData

DOMAIN_NAME = "1inch Aggregation Router"
DOMAIN_VERSION = "6"

EIP712_DOMAIN_FIELDS = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]

ORDER_FIELDS = [
    {"name": "salt", "type": "uint256"},
    {"name": "maker", "type": "address"},
    {"name": "receiver", "type": "address"},
    {"name": "makerAsset", "type": "address"},
    {"name": "takerAsset", "type": "address"},
    {"name": "makingAmount", "type": "uint256"},
    {"name": "takingAmount", "type": "uint256"},
    {"name": "makerTraits", "type": "uint256"},
]

EIP712_DOMAIN_TYPEHASH = keccak(
    b"EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"
)
ORDER_TYPEHASH = keccak(
    b"Order(uint256 salt,address maker,address receiver,address makerAsset,address takerAsset,"
    b"uint256 makingAmount,uint256 takingAmount,uint256 makerTraits)"
)


def build_domain(chain_id: int, verifying_contract: str) -> dict[str, Any]:
    return {
        "name": DOMAIN_NAME,
        "version": DOMAIN_VERSION,
        "chainId": chain_id,
        "verifyingContract": to_checksum_address(verifying_contract),
    }


def build_typed_data(
    order: LimitOrderData, chain_id: int, verifying_contract: str
) -> dict[str, Any]:
    """Full eth_signTypedData_v4 payload."""
    return {
        "primaryType": "Order",
        "types": {
            "EIP712Domain": EIP712_DOMAIN_FIELDS,
            "Order": ORDER_FIELDS,
        },
        "domain": build_domain(chain_id, verifying_contract),
        "message": order.to_message(),
    }


def domain_separator(chain_id: int, verifying_contract: str) -> bytes:
    return keccak(
        abi_encode(
            ["bytes32", "bytes32", "bytes32", "uint256", "address"],
            [
                EIP712_DOMAIN_TYPEHASH,
                keccak(DOMAIN_NAME.encode()),
                keccak(DOMAIN_VERSION.encode()),
                chain_id,
                to_checksum_address(verifying_contract),
            ],
        )
    )


def hash_order_struct(order: LimitOrderData) -> bytes:
    return keccak(
        abi_encode(
            [
                "bytes32", "uint256", "address", "address", "address",
                "address", "uint256", "uint256", "uint256",
            ],
            [
                ORDER_TYPEHASH,
                order.salt,
                order.maker,
                order.receiver,
                order.maker_asset,
                order.taker_asset,
                order.making_amount,
                order.taking_amount,
                order.maker_traits,
            ],
        )
    )


def compute_order_hash(
    order: LimitOrderData, chain_id: int, verifying_contract: str
) -> str:
    digest = keccak(
        b"\x19\x01" + domain_separator(chain_id, verifying_contract) + hash_order_struct(order)
    )
    return "0x" + digest.hex()
