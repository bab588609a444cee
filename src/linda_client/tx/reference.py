"""
Reference block binding.

Ties a transaction to a recent block (TAPOS): the last two bytes of the
block number, eight bytes of the block id and an expiration five minutes
after the block's timestamp.
"""

from __future__ import annotations
import logging
from typing import Any, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from ..codec.bytecodec import hex_to_bytes, long_to_byte_array
from ..runtime.errors import EncodingError, LindaError, StaleReferenceError
from ..transactions import BlockReference, RawTransaction

logger = logging.getLogger(__name__)

EXPIRATION_WINDOW_MS = 5 * 60 * 1000

# blockId[8:16] must be a full 8 bytes, so the hash needs 8 + 8 + 1 bytes
MIN_BLOCK_HASH_LENGTH = 17


def _as_reference(block: Union[BlockReference, Mapping[str, Any], None]) -> BlockReference:
    if block is None:
        raise StaleReferenceError("No block reference available")
    if isinstance(block, BlockReference):
        return block
    try:
        return BlockReference.model_validate(block)
    except ValidationError as e:
        raise StaleReferenceError(f"Malformed block reference: {e}", cause=e)


def compute_reference(block: Union[BlockReference, Mapping[str, Any]]) -> Tuple[bytes, bytes, int]:
    """
    Compute the binding fields for a block.

    Args:
        block: Latest block summary (number, hash, timestamp)

    Returns:
        Tuple of (ref_block_bytes, ref_block_hash, expiration)

    Raises:
        StaleReferenceError: If the block is missing or its hash is unusable;
            a hash must decode to at least 17 bytes, so a 16-byte hash is rejected
    """
    block = _as_reference(block)

    try:
        num_bytes = long_to_byte_array(block.number)[::-1]
        hash_bytes = hex_to_bytes(block.hash)
    except EncodingError as e:
        raise StaleReferenceError(f"Unusable block reference: {e.message}", cause=e)

    if len(hash_bytes) < MIN_BLOCK_HASH_LENGTH:
        raise StaleReferenceError(
            f"Block hash too short: {len(hash_bytes)} bytes",
            details={"number": block.number, "hash": block.hash},
        )

    block_id = num_bytes[:8] + hash_bytes[8:len(hash_bytes) - 1]
    ref_block_hash = block_id[8:16]
    ref_block_bytes = num_bytes[6:8]
    expiration = block.timestamp_ms + EXPIRATION_WINDOW_MS
    return ref_block_bytes, ref_block_hash, expiration


def bind(tx: RawTransaction, block: Union[BlockReference, Mapping[str, Any], None]) -> RawTransaction:
    """
    Bind a transaction to a reference block.

    Mutates and returns the same instance. Binding again overwrites the
    previous values. On failure the transaction is left untouched.

    Raises:
        StaleReferenceError: If the block reference is missing or malformed
    """
    ref_block_bytes, ref_block_hash, expiration = compute_reference(block)

    tx.ref_block_bytes = ref_block_bytes
    tx.ref_block_hash = ref_block_hash
    tx.expiration = expiration

    logger.debug("Bound %s transaction to ref bytes %s, expiration %d",
                 tx.contract_type.message_name, ref_block_bytes.hex(), expiration)
    return tx


def bind_latest(tx: RawTransaction, gateway) -> RawTransaction:
    """
    Fetch the latest block from ``gateway`` and bind ``tx`` to it.

    Gateway failures surface as ``StaleReferenceError`` with the original
    error as cause. No retry happens here.
    """
    try:
        block: Optional[BlockReference] = gateway.fetch_latest_block()
    except StaleReferenceError:
        raise
    except LindaError as e:
        raise StaleReferenceError(f"Failed to fetch latest block: {e.message}", cause=e)
    except Exception as e:
        raise StaleReferenceError(f"Failed to fetch latest block: {e}", cause=e)
    return bind(tx, block)


__all__ = [
    "EXPIRATION_WINDOW_MS",
    "compute_reference",
    "bind",
    "bind_latest",
]
