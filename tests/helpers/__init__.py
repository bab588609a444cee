from .mocks import MockGateway
from .factories import (
    EXAMPLE_BLOCK_HASH,
    FIXED_TIMESTAMP,
    mk_address,
    mk_block,
    mk_block_payload,
    mk_bound_transfer,
    mk_private_key,
    mk_transfer,
)

__all__ = [
    "MockGateway",
    "EXAMPLE_BLOCK_HASH",
    "FIXED_TIMESTAMP",
    "mk_address",
    "mk_block",
    "mk_block_payload",
    "mk_bound_transfer",
    "mk_private_key",
    "mk_transfer",
]
