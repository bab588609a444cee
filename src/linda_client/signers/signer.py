"""
Base signer interface.

A signer turns a bound ``RawTransaction`` into a ``SignedEnvelope``. Concrete
signers only supply ``sign_digest``; digest computation, the bound-before-sign
check and envelope assembly are shared.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from ..codec.hashes import transaction_id
from ..codec.transaction_codec import serialize_raw, serialize_transaction
from ..crypto.secp256k1 import SIGNATURE_LENGTH
from ..runtime.errors import LindaError, SignerError, UnboundTransactionError
from ..transactions import RawTransaction, SignedEnvelope

logger = logging.getLogger(__name__)


class TransactionSigner(ABC):
    """
    Signing capability.

    Implementations may block (hardware or remote backends).
    """

    @abstractmethod
    def sign_digest(self, digest: bytes, key_handle: Any = None) -> bytes:
        """
        Sign a transaction id.

        Args:
            digest: 32-byte SHA-256 of the serialized raw data
            key_handle: Implementation specific key reference

        Returns:
            65-byte recoverable signature ``r || s || v``

        Raises:
            SignerError: If signing fails
        """
        pass

    def sign_transaction(self, tx: RawTransaction, key_handle: Any = None) -> SignedEnvelope:
        """
        Sign a bound transaction and serialize it.

        Appends the signature to ``tx.signatures``; nothing else on ``tx``
        changes.

        Args:
            tx: Transaction already bound to a reference block
            key_handle: Passed through to ``sign_digest``

        Returns:
            SignedEnvelope with the transaction hex and txid

        Raises:
            UnboundTransactionError: If ``tx`` has not been bound
            SignerError: If the backend fails or returns a malformed signature
        """
        if not tx.is_bound:
            raise UnboundTransactionError(
                details={"contract_type": tx.contract_type.message_name},
            )

        digest = transaction_id(serialize_raw(tx))

        try:
            signature = self.sign_digest(digest, key_handle)
        except LindaError:
            raise
        except Exception as e:
            raise SignerError(f"{self.__class__.__name__} failed: {e}", cause=e)

        if not isinstance(signature, (bytes, bytearray)):
            raise SignerError(
                f"Signature must be bytes, got {type(signature).__name__}",
                details={"signer": self.__class__.__name__},
            )
        signature = bytes(signature)
        if len(signature) != SIGNATURE_LENGTH:
            raise SignerError(
                f"Signature must be {SIGNATURE_LENGTH} bytes, got {len(signature)}",
                details={"signer": self.__class__.__name__},
            )

        tx.signatures.append(signature)
        envelope = SignedEnvelope(hex=serialize_transaction(tx).hex(), txid=digest.hex())
        logger.debug("Signed %s transaction %s", tx.contract_type.message_name, envelope.txid)
        return envelope

    def sign(self, tx: RawTransaction, key_handle: Optional[Any] = None) -> SignedEnvelope:
        """Alias of ``sign_transaction``."""
        return self.sign_transaction(tx, key_handle)


__all__ = [
    "TransactionSigner",
]
