"""
Binary Codec Module

Byte/hex helpers and the protobuf wire codec for transactions and contract
payloads.

Key components:
- bytecodec.py: hex conversion and fixed-width integer encoding
- writer.py / reader.py: protobuf wire primitives
- transaction_codec.py: contract, raw-data and transaction serialization
- parameters.py: contract payload decoding for display
- hashes.py: SHA-256 and Keccak-256 helpers
"""

from .bytecodec import (
    byte_array_to_long,
    bytes_to_hex,
    decode_string,
    encode_string,
    hex_to_bytes,
    long_to_byte_array,
)
from .hashes import keccak256, sha256_bytes, transaction_id
from .parameters import decode_parameters
from .reader import BinaryReader
from .transaction_codec import (
    compute_txid,
    encode_contract,
    encode_contract_parameter,
    parse_raw,
    parse_transaction,
    raw_hex,
    serialize_raw,
    serialize_transaction,
)
from .writer import BinaryWriter

__all__ = [
    "BinaryReader",
    "BinaryWriter",
    "byte_array_to_long",
    "bytes_to_hex",
    "decode_string",
    "encode_string",
    "hex_to_bytes",
    "long_to_byte_array",
    "keccak256",
    "sha256_bytes",
    "transaction_id",
    "decode_parameters",
    "compute_txid",
    "encode_contract",
    "encode_contract_parameter",
    "parse_raw",
    "parse_transaction",
    "raw_hex",
    "serialize_raw",
    "serialize_transaction",
]
