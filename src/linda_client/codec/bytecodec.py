"""
Byte Codec

Byte-array/hex conversion and fixed-width integer encoding used by the
reference binder and the parameter codec.
"""

import struct
from typing import Union

from ..runtime.errors import EncodingError

BytesLike = Union[bytes, bytearray, memoryview]


def hex_to_bytes(hex_str: str) -> bytes:
    """
    Decode a hex string into bytes.

    Accepts an optional ``0x`` prefix and either letter case.

    Args:
        hex_str: Hex encoded string

    Returns:
        Decoded bytes

    Raises:
        EncodingError: If the string is not valid hex
    """
    if not isinstance(hex_str, str):
        raise EncodingError(f"Expected hex string, got {type(hex_str).__name__}")
    value = hex_str[2:] if hex_str[:2] in ("0x", "0X") else hex_str
    try:
        return bytes.fromhex(value)
    except ValueError as e:
        raise EncodingError(f"Invalid hex string: {hex_str!r}", cause=e)


def bytes_to_hex(data: BytesLike) -> str:
    """Encode bytes as lowercase hex without prefix."""
    return bytes(data).hex()


def long_to_byte_array(value: int) -> bytes:
    """
    Encode an unsigned integer as an 8-byte little-endian sequence.

    Args:
        value: Integer in ``[0, 2**64)``

    Returns:
        8 bytes, least significant first

    Raises:
        EncodingError: If the value does not fit in 64 unsigned bits
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodingError(f"Expected integer, got {type(value).__name__}")
    if value < 0 or value > 0xFFFFFFFFFFFFFFFF:
        raise EncodingError(f"Value out of u64 range: {value}")
    return struct.pack('<Q', value)


def byte_array_to_long(data: BytesLike) -> int:
    """Decode a little-endian byte sequence of up to 8 bytes."""
    data = bytes(data)
    if len(data) > 8:
        raise EncodingError(f"Expected at most 8 bytes, got {len(data)}")
    return int.from_bytes(data, 'little')


def encode_string(value: str) -> bytes:
    """Encode a string as UTF-8 bytes."""
    return value.encode('utf-8')


def decode_string(data: BytesLike) -> str:
    """Decode UTF-8 bytes, replacing undecodable sequences."""
    return bytes(data).decode('utf-8', errors='replace')


__all__ = [
    "hex_to_bytes",
    "bytes_to_hex",
    "long_to_byte_array",
    "byte_array_to_long",
    "encode_string",
    "decode_string",
]
