"""
Hash Functions

SHA-256 for transaction ids and Keccak-256 for address derivation.
Keccak-256 is not NIST SHA3-256; never substitute hashlib.sha3_256.
"""

import hashlib

from Crypto.Hash import keccak


def sha256_bytes(input_bytes: bytes) -> bytes:
    """
    Compute SHA-256 hash of input bytes.

    Args:
        input_bytes: Input bytes to hash

    Returns:
        SHA-256 hash as bytes (32 bytes)
    """
    return hashlib.sha256(input_bytes).digest()


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash.

    Args:
        data: Input data to hash

    Returns:
        32-byte Keccak-256 hash
    """
    return keccak.new(digest_bits=256, data=data).digest()


def transaction_id(raw_data: bytes) -> bytes:
    """
    Compute the transaction id: SHA-256 of the serialized ``raw_data``.

    This is also the digest a signer signs.
    """
    return sha256_bytes(raw_data)
