"""
Transaction signers.

``TransactionSigner`` is the signing capability; ``PrivateKeySigner`` is the
default implementation and ``RemoteSigner`` adapts any external backend.
"""

from .signer import TransactionSigner
from .private_key import PrivateKeySigner
from .remote import RemoteSigner

__all__ = [
    "TransactionSigner",
    "PrivateKeySigner",
    "RemoteSigner",
]
