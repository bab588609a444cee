"""
Linda Client Error Model

This module provides the error handling framework for the client SDK:
a numeric error code per failure class and one exception type per code
family, so callers can branch on type or on ``code``.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Client error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2
    INVALID_ARGUMENT = 3
    INVALID_ADDRESS = 4

    # Encoding errors (100-199)
    ENCODING_ERROR = 100
    DECODE_ERROR = 101
    UNSUPPORTED_CONTRACT_TYPE = 102

    # Network errors (200-299)
    NETWORK_ERROR = 200
    STALE_REFERENCE = 201
    BROADCAST_FAILED = 202

    # Signing errors (300-399)
    SIGNER_ERROR = 300
    UNBOUND_TRANSACTION = 301
    INVALID_PRIVATE_KEY = 302


class LindaError(Exception):
    """
    Base class for all client errors.

    Carries a structured code, optional details and the underlying cause.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a client error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class InvalidArgumentError(LindaError):
    """Malformed input to a transaction constructor."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_ARGUMENT, details, cause)


class InvalidAddressError(InvalidArgumentError):
    """Address failed canonical-format validation."""

    def __init__(self, message: str = "Invalid address",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, details, cause)
        self.code = ErrorCode.INVALID_ADDRESS


class EncodingError(LindaError):
    """Data encoding errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.ENCODING_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class DecodeError(EncodingError):
    """Malformed wire payload."""

    def __init__(self, message: str = "Decode error",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.DECODE_ERROR, details, cause)


class UnsupportedContractTypeError(EncodingError):
    """Decode requested for a contract type outside the decodable set."""

    def __init__(self, contract_type: Any, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Unsupported contract type: {contract_type}",
                         ErrorCode.UNSUPPORTED_CONTRACT_TYPE, details)
        self.contract_type = contract_type


class NetworkError(LindaError):
    """Network-related errors raised by a gateway."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.NETWORK_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class StaleReferenceError(NetworkError):
    """Block reference missing, unreachable or inconsistent."""

    def __init__(self, message: str = "Block reference unavailable",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.STALE_REFERENCE, details, cause)


class BroadcastError(NetworkError):
    """The node rejected a broadcast transaction."""

    def __init__(self, message: str = "Broadcast failed",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.BROADCAST_FAILED, details, cause)


class SignerError(LindaError):
    """Signing backend failures."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.SIGNER_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class UnboundTransactionError(SignerError):
    """Signing attempted before the transaction was bound to a block."""

    def __init__(self, message: str = "Transaction must be bound before signing",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.UNBOUND_TRANSACTION, details)


def error_from_response(response: Dict[str, Any]) -> Optional[LindaError]:
    """
    Create an appropriate error from a gateway response.

    Broadcast responses report failure as ``{"result": false, "code": ...,
    "message": ...}``; generic failures use an ``error`` key.

    Args:
        response: Decoded JSON response

    Returns:
        Error instance or None if the response reports success
    """
    if "error" in response:
        error_data = response["error"]
        if isinstance(error_data, dict):
            message = error_data.get("message", "Unknown error")
            return NetworkError(message, details=error_data)
        return NetworkError(str(error_data))

    if response.get("result") is False or response.get("success") is False:
        message = response.get("message") or response.get("code") or "Broadcast failed"
        return BroadcastError(str(message), details=dict(response))

    return None


__all__ = [
    "ErrorCode",
    "LindaError",
    "InvalidArgumentError",
    "InvalidAddressError",
    "EncodingError",
    "DecodeError",
    "UnsupportedContractTypeError",
    "NetworkError",
    "StaleReferenceError",
    "BroadcastError",
    "SignerError",
    "UnboundTransactionError",
    "error_from_response",
]
