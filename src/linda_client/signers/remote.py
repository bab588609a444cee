"""
Externally backed signer.

Wraps a caller-supplied callable, e.g. a hardware wallet bridge or a remote
signing service. The callable receives the 32-byte transaction id and the
key handle, and returns the 65-byte recoverable signature.
"""

from typing import Any, Callable

from .signer import TransactionSigner

SignFunction = Callable[[bytes, Any], bytes]


class RemoteSigner(TransactionSigner):
    """Signer delegating the digest signature to an external backend."""

    def __init__(self, sign_function: SignFunction, name: str = "remote"):
        if not callable(sign_function):
            raise TypeError("sign_function must be callable")
        self._sign_function = sign_function
        self.name = name

    def sign_digest(self, digest: bytes, key_handle: Any = None) -> bytes:
        return self._sign_function(digest, key_handle)

    def __repr__(self) -> str:
        return f"RemoteSigner(name={self.name!r})"


__all__ = [
    "RemoteSigner",
    "SignFunction",
]
