"""
Address Pydantic custom type for canonical account addresses.

A canonical address is the Base58Check encoding of 21 bytes: one network
prefix byte followed by the 20-byte account id.
"""

from typing import Any, Union

import base58
from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from .errors import InvalidAddressError

# 0x41 renders as "T..." addresses, 0x30 as "L..." addresses
DEFAULT_ADDRESS_PREFIX = 0x30
ADDRESS_PREFIXES = frozenset({0x41, 0x30})
ADDRESS_LENGTH = 21


class Address:
    """Custom Pydantic type for canonical Base58Check addresses."""

    def __init__(self, address: str):
        if not isinstance(address, str):
            raise InvalidAddressError(f"Address must be a string, got {type(address).__name__}")
        if not address:
            raise InvalidAddressError("Address cannot be empty")

        try:
            raw = base58.b58decode_check(address)
        except ValueError as e:
            raise InvalidAddressError(f"Invalid Base58Check address: {address!r}", cause=e)

        if len(raw) != ADDRESS_LENGTH:
            raise InvalidAddressError(
                f"Address must decode to {ADDRESS_LENGTH} bytes, got {len(raw)}",
                details={"address": address},
            )
        if raw[0] not in ADDRESS_PREFIXES:
            raise InvalidAddressError(
                f"Unknown address prefix 0x{raw[0]:02x}",
                details={"address": address},
            )

        self.address = address
        self._raw = raw

    @classmethod
    def parse(cls, value: Union[str, "Address"]) -> "Address":
        """Return ``value`` as an Address, validating strings."""
        if isinstance(value, cls):
            return value
        return cls(value)

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Address":
        """
        Build an address from its 21 raw bytes.

        Raises:
            InvalidAddressError: If the bytes are not a valid address payload
        """
        raw = bytes(raw)
        if len(raw) != ADDRESS_LENGTH:
            raise InvalidAddressError(f"Address must be {ADDRESS_LENGTH} bytes, got {len(raw)}")
        return cls(base58.b58encode_check(raw).decode('ascii'))

    @classmethod
    def from_account_id(cls, account_id: bytes, prefix: int = DEFAULT_ADDRESS_PREFIX) -> "Address":
        """Build an address from a 20-byte account id and a network prefix."""
        if len(account_id) != ADDRESS_LENGTH - 1:
            raise InvalidAddressError(f"Account id must be 20 bytes, got {len(account_id)}")
        return cls.from_bytes(bytes([prefix]) + bytes(account_id))

    def to_bytes(self) -> bytes:
        """Raw 21-byte form written on the wire."""
        return self._raw

    @property
    def prefix(self) -> int:
        return self._raw[0]

    @property
    def account_id(self) -> bytes:
        return self._raw[1:]

    def __str__(self) -> str:
        return self.address

    def __repr__(self) -> str:
        return f"Address('{self.address}')"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Address):
            return self.address == other.address
        elif isinstance(other, str):
            return self.address == other
        return False

    def __hash__(self) -> int:
        return hash(self.address)

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        """Return a Pydantic CoreSchema that validates the Address."""
        return core_schema.no_info_before_validator_function(
            cls._validate,
            core_schema.is_instance_schema(cls),
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def _validate(cls, value: Any) -> "Address":
        """Validate and convert the input to an Address."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except InvalidAddressError as e:
                # pydantic only wraps ValueError/AssertionError
                raise ValueError(e.message) from e
        raise ValueError(f"Invalid address: {value!r}")


def is_valid_address(value: Any) -> bool:
    """Check whether ``value`` is a canonical address string."""
    try:
        Address(value)
    except InvalidAddressError:
        return False
    return True


__all__ = [
    "Address",
    "ADDRESS_LENGTH",
    "ADDRESS_PREFIXES",
    "DEFAULT_ADDRESS_PREFIX",
    "is_valid_address",
]
