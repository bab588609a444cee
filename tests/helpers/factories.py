"""
Test factories for creating test data consistently.

Keys and addresses are derived from small integer seeds so every test run
sees the same values.
"""

from __future__ import annotations
from typing import Dict, Optional

from linda_client.runtime.address import Address, DEFAULT_ADDRESS_PREFIX
from linda_client.transactions import BlockReference, RawTransaction
from linda_client.tx import bind, build_transfer

# block hash from the reference-binding example
EXAMPLE_BLOCK_HASH = "00000000000000640000000000000000000000000000000000000000000000"
FIXED_TIMESTAMP = 1_600_000_000_000


def mk_private_key(seed: int = 1) -> str:
    """Deterministic secp256k1 private key as hex."""
    return seed.to_bytes(32, 'big').hex()


def mk_address(seed: int = 1, prefix: int = DEFAULT_ADDRESS_PREFIX) -> str:
    """
    Deterministic canonical address.

    Args:
        seed: Byte repeated to form the 20-byte account id
        prefix: Network prefix byte
    """
    return str(Address.from_account_id(bytes([seed]) * 20, prefix))


def mk_block(number: int = 100, block_hash: Optional[str] = None,
             timestamp: int = FIXED_TIMESTAMP) -> BlockReference:
    """Block reference with a 32-byte hash derived from the number by default."""
    if block_hash is None:
        block_hash = number.to_bytes(8, 'big').hex() + (bytes(range(1, 25))).hex()
    return BlockReference(number=number, hash=block_hash, timestamp_ms=timestamp)


def mk_block_payload(number: int = 100, timestamp: int = FIXED_TIMESTAMP) -> Dict:
    """Latest-block JSON as the explorer API returns it."""
    block = mk_block(number, timestamp=timestamp)
    return {
        "number": block.number,
        "hash": block.hash,
        "timestamp": block.timestamp_ms,
        "witnessAddress": mk_address(9),
        "nrOfTrx": 0,
    }


def mk_transfer(amount: int = 1_000_000, owner_seed: int = 1, to_seed: int = 2,
                timestamp: int = FIXED_TIMESTAMP) -> RawTransaction:
    """Unbound native transfer between two deterministic addresses."""
    return build_transfer(mk_address(owner_seed), mk_address(to_seed), amount, timestamp=timestamp)


def mk_bound_transfer(amount: int = 1_000_000, block: Optional[BlockReference] = None) -> RawTransaction:
    """Native transfer already bound to ``block`` (or a default block)."""
    return bind(mk_transfer(amount), block or mk_block())


__all__ = [
    "EXAMPLE_BLOCK_HASH",
    "FIXED_TIMESTAMP",
    "mk_private_key",
    "mk_address",
    "mk_block",
    "mk_block_payload",
    "mk_transfer",
    "mk_bound_transfer",
]
