"""
Binary Writer - protobuf wire format

Implements the primitive encodings of the chain's protobuf schema:
varints, field keys and length-delimited values. Higher level message
layout lives in transaction_codec.py.
"""

from typing import List

WIRE_VARINT = 0
WIRE_LEN = 2


class BinaryWriter:
    """
    Binary writer for protobuf wire format.

    Field helpers skip proto3 default values (0, empty bytes) so output
    matches the canonical serialization of the reference implementation.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[int] = []

    def u8(self, v: int) -> None:
        """Write unsigned 8-bit integer."""
        self._bb.append(v & 0xFF)

    def bytes(self, v: bytes) -> None:
        """Write raw bytes without length prefix."""
        self._bb.extend(v)

    def uvarint(self, v: int) -> None:
        """
        Write unsigned varint in ULEB128 format.

        Negative values are written as their 64-bit two's complement, which is
        how protobuf encodes negative int64.

        Args:
            v: Integer value to encode as varint
        """
        x = v & 0xFFFFFFFFFFFFFFFF
        while x >= 0x80:
            self.u8((x & 0x7F) | 0x80)
            x >>= 7
        self.u8(x)

    def key(self, field: int, wire_type: int) -> None:
        """Write a field key (field number and wire type)."""
        if field < 1:
            raise ValueError(f"Field number must be positive: {field}")
        self.uvarint((field << 3) | wire_type)

    def len_prefixed_bytes(self, v: bytes) -> None:
        """Write bytes with a uvarint length prefix."""
        self.uvarint(len(v))
        self.bytes(v)

    def varint_field(self, field: int, v: int) -> None:
        """Write an integer/enum/bool field, omitted when zero."""
        v = int(v)
        if v == 0:
            return
        self.key(field, WIRE_VARINT)
        self.uvarint(v)

    def bytes_field(self, field: int, v: bytes) -> None:
        """Write a bytes field, omitted when empty."""
        if not v:
            return
        self.key(field, WIRE_LEN)
        self.len_prefixed_bytes(v)

    def string_field(self, field: int, v: str) -> None:
        """Write a UTF-8 string field, omitted when empty."""
        self.bytes_field(field, v.encode('utf-8') if v else b"")

    def message_field(self, field: int, encoded: bytes) -> None:
        """
        Write an embedded message field.

        Embedded messages are written even when empty: presence is meaningful.
        """
        self.key(field, WIRE_LEN)
        self.len_prefixed_bytes(encoded)

    def to_bytes(self) -> bytes:
        """Return accumulated bytes as immutable bytes object."""
        return bytes(self._bb)
