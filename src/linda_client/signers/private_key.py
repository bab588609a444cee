"""
Private key signer.

Signs with a raw secp256k1 private key given as hex (optionally ``0x``
prefixed). The key may be fixed at construction or supplied per call.
"""

from __future__ import annotations
from typing import Any, Optional, Union

from ..crypto.secp256k1 import Secp256k1PrivateKey
from ..runtime.address import Address, DEFAULT_ADDRESS_PREFIX
from ..runtime.errors import SignerError
from .signer import TransactionSigner

KeyHandle = Union[str, bytes, Secp256k1PrivateKey]


def _load_key(key_handle: KeyHandle) -> Secp256k1PrivateKey:
    if isinstance(key_handle, Secp256k1PrivateKey):
        return key_handle
    if isinstance(key_handle, str):
        return Secp256k1PrivateKey.from_hex(key_handle)
    if isinstance(key_handle, (bytes, bytearray)):
        return Secp256k1PrivateKey(bytes(key_handle))
    raise SignerError(f"Unsupported key handle type: {type(key_handle).__name__}")


class PrivateKeySigner(TransactionSigner):
    """Default signer backed by a local private key."""

    def __init__(self, private_key: Optional[KeyHandle] = None):
        self._key = _load_key(private_key) if private_key is not None else None

    def address(self, prefix: int = DEFAULT_ADDRESS_PREFIX) -> Address:
        """Address of the configured key."""
        if self._key is None:
            raise SignerError("No private key configured")
        return self._key.to_address(prefix)

    def sign_digest(self, digest: bytes, key_handle: Any = None) -> bytes:
        if key_handle is not None:
            key = _load_key(key_handle)
        elif self._key is not None:
            key = self._key
        else:
            raise SignerError("No private key supplied")
        return key.sign_recoverable(digest)

    def __repr__(self) -> str:
        return f"PrivateKeySigner(configured={self._key is not None})"


__all__ = [
    "PrivateKeySigner",
]
