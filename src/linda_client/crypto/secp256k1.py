"""
SECP256K1 keys and recoverable signatures.

Signatures are 65 bytes: ``r || s || v`` with ``v = recovery_id + 27``.
Addresses are derived Ethereum-style: Keccak-256 of the uncompressed public
key (without the 0x04 marker), last 20 bytes, behind a network prefix byte.
"""

from __future__ import annotations
import os
from typing import Optional, Union

import coincurve

from ..codec.hashes import keccak256
from ..runtime.address import Address, DEFAULT_ADDRESS_PREFIX
from ..runtime.errors import ErrorCode, SignerError

SIGNATURE_LENGTH = 65
RECOVERY_OFFSET = 27


class Secp256k1Error(SignerError):
    """Base exception for SECP256K1 operations."""
    pass


class Secp256k1PublicKey:
    """SECP256K1 public key."""

    def __init__(self, public_key_bytes: bytes):
        """
        Initialize public key.

        Args:
            public_key_bytes: Public key bytes (33 or 65 bytes)
        """
        try:
            self._key = coincurve.PublicKey(bytes(public_key_bytes))
        except ValueError as e:
            raise Secp256k1Error(f"Invalid public key: {e}", cause=e)

    @classmethod
    def recover(cls, signature: bytes, digest: bytes) -> Secp256k1PublicKey:
        """
        Recover the signer's public key from a 65-byte signature.

        Args:
            signature: ``r || s || v`` where v is ``recid`` or ``recid + 27``
            digest: The 32-byte digest that was signed
        """
        if len(signature) != SIGNATURE_LENGTH:
            raise Secp256k1Error(f"Signature must be {SIGNATURE_LENGTH} bytes, got {len(signature)}")
        v = signature[64]
        recid = v - RECOVERY_OFFSET if v >= RECOVERY_OFFSET else v
        try:
            key = coincurve.PublicKey.from_signature_and_message(
                signature[:64] + bytes([recid]), digest, hasher=None)
        except ValueError as e:
            raise Secp256k1Error(f"Cannot recover public key: {e}", cause=e)
        return cls(key.format(compressed=False))

    def to_bytes(self, compressed: bool = False) -> bytes:
        return self._key.format(compressed=compressed)

    def to_address(self, prefix: int = DEFAULT_ADDRESS_PREFIX) -> Address:
        return address_from_public_key(self.to_bytes(), prefix)

    def __eq__(self, other) -> bool:
        return isinstance(other, Secp256k1PublicKey) and self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash(self.to_bytes())


class Secp256k1PrivateKey:
    """SECP256K1 private key producing deterministic (RFC 6979) signatures."""

    def __init__(self, private_key_bytes: Optional[bytes] = None):
        """
        Initialize private key.

        Args:
            private_key_bytes: 32-byte private key (random if omitted)
        """
        if private_key_bytes is None:
            private_key_bytes = os.urandom(32)
        if len(private_key_bytes) != 32:
            raise Secp256k1Error(
                f"Private key must be 32 bytes, got {len(private_key_bytes)}",
                code=ErrorCode.INVALID_PRIVATE_KEY,
            )
        try:
            self._key = coincurve.PrivateKey(bytes(private_key_bytes))
        except ValueError as e:
            raise Secp256k1Error("Private key out of curve range", code=ErrorCode.INVALID_PRIVATE_KEY, cause=e)

    @classmethod
    def from_hex(cls, private_key_hex: str) -> Secp256k1PrivateKey:
        """Create a key from hex, with or without ``0x``."""
        if not isinstance(private_key_hex, str):
            raise Secp256k1Error("Private key must be a hex string", code=ErrorCode.INVALID_PRIVATE_KEY)
        value = private_key_hex[2:] if private_key_hex[:2] in ("0x", "0X") else private_key_hex
        try:
            raw = bytes.fromhex(value)
        except ValueError as e:
            # never echo the key material
            raise Secp256k1Error("Private key is not valid hex", code=ErrorCode.INVALID_PRIVATE_KEY, cause=e)
        return cls(raw)

    def to_bytes(self) -> bytes:
        return self._key.secret

    def public_key(self) -> Secp256k1PublicKey:
        return Secp256k1PublicKey(self._key.public_key.format(compressed=False))

    def to_address(self, prefix: int = DEFAULT_ADDRESS_PREFIX) -> Address:
        return self.public_key().to_address(prefix)

    def sign_recoverable(self, digest: bytes) -> bytes:
        """
        Sign a 32-byte digest.

        Returns:
            65 bytes ``r || s || (recid + 27)``
        """
        if len(digest) != 32:
            raise Secp256k1Error(f"Digest must be 32 bytes, got {len(digest)}")
        sig = self._key.sign_recoverable(digest, hasher=None)
        return sig[:64] + bytes([sig[64] + RECOVERY_OFFSET])

    def __repr__(self) -> str:
        return "Secp256k1PrivateKey(<hidden>)"


def address_from_public_key(public_key: bytes, prefix: int = DEFAULT_ADDRESS_PREFIX) -> Address:
    """
    Derive the canonical address of a public key.

    Args:
        public_key: Compressed (33) or uncompressed (65) public key bytes
        prefix: Network prefix byte
    """
    if len(public_key) != 65:
        public_key = Secp256k1PublicKey(public_key).to_bytes(compressed=False)
    account_id = keccak256(public_key[1:])[-20:]
    return Address.from_account_id(account_id, prefix)


def address_from_private_key(private_key: Union[str, bytes, Secp256k1PrivateKey],
                             prefix: int = DEFAULT_ADDRESS_PREFIX) -> Address:
    """Derive the canonical address of a private key (hex, bytes or key object)."""
    if isinstance(private_key, str):
        private_key = Secp256k1PrivateKey.from_hex(private_key)
    elif isinstance(private_key, (bytes, bytearray)):
        private_key = Secp256k1PrivateKey(bytes(private_key))
    return private_key.to_address(prefix)


def recover_address(signature: bytes, digest: bytes, prefix: int = DEFAULT_ADDRESS_PREFIX) -> Address:
    """Address of whoever produced ``signature`` over ``digest``."""
    return Secp256k1PublicKey.recover(signature, digest).to_address(prefix)


__all__ = [
    "Secp256k1Error",
    "Secp256k1PublicKey",
    "Secp256k1PrivateKey",
    "address_from_public_key",
    "address_from_private_key",
    "recover_address",
    "SIGNATURE_LENGTH",
]
