"""Runtime helpers for the Linda client SDK"""

from .address import Address, is_valid_address
from .errors import LindaError, ErrorCode

__all__ = [
    "Address",
    "is_valid_address",
    "LindaError",
    "ErrorCode",
]
