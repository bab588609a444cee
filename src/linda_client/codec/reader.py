"""
Binary Reader - protobuf wire format

Counterpart of writer.py. Reads field keys and values; the message layer
decides what each field number means.
"""

import builtins
from typing import Dict, Iterator, List, Tuple, Union

from ..runtime.errors import DecodeError
from .writer import WIRE_LEN, WIRE_VARINT

WIRE_FIXED64 = 1
WIRE_FIXED32 = 5

FieldValue = Union[int, builtins.bytes]


class BinaryReader:
    """Binary reader for protobuf wire format."""

    def __init__(self, buf: builtins.bytes):
        """
        Initialize reader with byte buffer.

        Args:
            buf: Byte buffer to read from
        """
        self._buf = bytes(buf)
        self._off = 0

    @property
    def eof(self) -> bool:
        """True when the whole buffer has been consumed."""
        return self._off >= len(self._buf)

    def u8(self) -> int:
        """Read unsigned 8-bit integer."""
        if self._off >= len(self._buf):
            raise DecodeError("Buffer overflow: attempting to read beyond end")
        val = self._buf[self._off]
        self._off += 1
        return val

    def uvarint(self) -> int:
        """
        Read unsigned varint in ULEB128 format.

        Returns:
            Decoded unsigned integer value
        """
        x = 0
        s = 0
        while True:
            if s > 63:
                raise DecodeError("Varint overflows 64 bits")
            b = self.u8()
            if b < 0x80:
                x |= b << s
                break
            x |= (b & 0x7F) << s
            s += 7
        return x & 0xFFFFFFFFFFFFFFFF

    def bytes(self, n: int) -> builtins.bytes:
        """Read n bytes from buffer."""
        if self._off + n > len(self._buf):
            raise DecodeError(f"Buffer overflow: attempting to read {n} bytes beyond end")
        out = self._buf[self._off : self._off + n]
        self._off += n
        return out

    def len_prefixed_bytes(self) -> builtins.bytes:
        """Read bytes with length read from a uvarint prefix."""
        n = self.uvarint()
        return self.bytes(n)

    def key(self) -> Tuple[int, int]:
        """Read a field key, returning ``(field_number, wire_type)``."""
        k = self.uvarint()
        field, wire_type = k >> 3, k & 0x07
        if field == 0:
            raise DecodeError("Invalid field number 0")
        return field, wire_type

    def value(self, wire_type: int) -> FieldValue:
        """Read one value of the given wire type."""
        if wire_type == WIRE_VARINT:
            return self.uvarint()
        if wire_type == WIRE_LEN:
            return self.len_prefixed_bytes()
        if wire_type == WIRE_FIXED64:
            return int.from_bytes(self.bytes(8), 'little')
        if wire_type == WIRE_FIXED32:
            return int.from_bytes(self.bytes(4), 'little')
        raise DecodeError(f"Unsupported wire type: {wire_type}")

    def fields(self) -> Iterator[Tuple[int, FieldValue]]:
        """Iterate over ``(field_number, value)`` pairs until the buffer ends."""
        while not self.eof:
            field, wire_type = self.key()
            yield field, self.value(wire_type)


def read_message(buf: builtins.bytes) -> Dict[int, List[FieldValue]]:
    """
    Parse a message into a mapping of field number to values.

    Repeated fields keep their wire order; for singular fields callers take
    the last value, as protobuf does.
    """
    out: Dict[int, List[FieldValue]] = {}
    for field, value in BinaryReader(buf).fields():
        out.setdefault(field, []).append(value)
    return out


def to_signed64(value: int) -> int:
    """Reinterpret an unsigned 64-bit varint as a signed int64."""
    return value - (1 << 64) if value >= (1 << 63) else value
