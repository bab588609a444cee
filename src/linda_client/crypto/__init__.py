"""
Cryptographic primitives.

SECP256K1 keys, recoverable signatures and address derivation.
"""

from .secp256k1 import (
    Secp256k1Error,
    Secp256k1PrivateKey,
    Secp256k1PublicKey,
    address_from_private_key,
    address_from_public_key,
    recover_address,
)

__all__ = [
    "Secp256k1Error",
    "Secp256k1PrivateKey",
    "Secp256k1PublicKey",
    "address_from_private_key",
    "address_from_public_key",
    "recover_address",
]
