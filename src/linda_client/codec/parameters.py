"""
Parameter Codec

Decodes a hex-encoded contract payload (the ``Any.value`` bytes of a
contract) into a mapping of named fields for display.

Dispatch is closed over ``DecodableContract``: every member must have a
decoder, checked when this module is imported. Transfer and TransferAsset
return every field; TriggerSmartContract and AccountPermissionUpdateContract
drop fields whose decoded value is the empty string.
"""

from __future__ import annotations
import logging
from typing import Any, Callable, Dict, List, Union

import base58

from ..enums import DecodableContract, PermissionType
from ..runtime.errors import DecodeError, EncodingError, UnsupportedContractTypeError
from .bytecodec import decode_string, hex_to_bytes
from .reader import read_message, to_signed64

logger = logging.getLogger(__name__)

DecodedParameters = Dict[str, Any]


def _last(fields: Dict[int, list], number: int, default: Any) -> Any:
    values = fields.get(number)
    return values[-1] if values else default


def _bytes(fields: Dict[int, list], number: int) -> bytes:
    value = _last(fields, number, b"")
    if not isinstance(value, bytes):
        raise DecodeError(f"Field {number}: expected length-delimited value")
    return value


def _int(fields: Dict[int, list], number: int) -> int:
    value = _last(fields, number, 0)
    if not isinstance(value, int):
        raise DecodeError(f"Field {number}: expected varint value")
    return to_signed64(value)


def _address(fields: Dict[int, list], number: int) -> str:
    raw = _bytes(fields, number)
    return base58.b58encode_check(raw).decode('ascii') if raw else ""


def _text(fields: Dict[int, list], number: int) -> str:
    return decode_string(_bytes(fields, number))


def _hex(fields: Dict[int, list], number: int) -> str:
    return _bytes(fields, number).hex()


def drop_empty(values: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``values`` without empty-string entries."""
    return {k: v for k, v in values.items() if v != ""}


# =============================================================================
# Per-contract decoders
# =============================================================================

def decode_transfer(payload: bytes) -> DecodedParameters:
    fields = read_message(payload)
    return {
        "owner_address": _address(fields, 1),
        "to_address": _address(fields, 2),
        "amount": _int(fields, 3),
    }


def decode_transfer_asset(payload: bytes) -> DecodedParameters:
    fields = read_message(payload)
    return {
        "asset_name": _text(fields, 1),
        "owner_address": _address(fields, 2),
        "to_address": _address(fields, 3),
        "amount": _int(fields, 4),
    }


def decode_trigger_smart_contract(payload: bytes) -> DecodedParameters:
    fields = read_message(payload)
    return drop_empty({
        "owner_address": _address(fields, 1),
        "contract_address": _address(fields, 2),
        "call_value": _int(fields, 3),
        "data": _hex(fields, 4),
        "call_token_value": _int(fields, 5),
        "token_id": _int(fields, 6),
    })


def _permission_type_name(value: int) -> Union[str, int]:
    try:
        return PermissionType(value).name.capitalize()
    except ValueError:
        return value


def _decode_permission(raw: bytes) -> DecodedParameters:
    fields = read_message(raw)
    keys: List[DecodedParameters] = []
    for raw_key in fields.get(7, []):
        if not isinstance(raw_key, bytes):
            raise DecodeError("Permission key: expected length-delimited value")
        key_fields = read_message(raw_key)
        keys.append(drop_empty({
            "address": _address(key_fields, 1),
            "weight": _int(key_fields, 2),
        }))
    return drop_empty({
        "type": _permission_type_name(_int(fields, 1)),
        "id": _int(fields, 2),
        "permission_name": _text(fields, 3),
        "threshold": _int(fields, 4),
        "parent_id": _int(fields, 5),
        "operations": _hex(fields, 6),
        "keys": keys,
    })


def decode_account_permission_update(payload: bytes) -> DecodedParameters:
    fields = read_message(payload)
    owner = _bytes(fields, 2)
    witness = _bytes(fields, 3)
    actives = []
    for raw_active in fields.get(4, []):
        if not isinstance(raw_active, bytes):
            raise DecodeError("Active permission: expected length-delimited value")
        actives.append(_decode_permission(raw_active))
    return drop_empty({
        "owner_address": _address(fields, 1),
        "owner": _decode_permission(owner) if 2 in fields else "",
        "witness": _decode_permission(witness) if 3 in fields else "",
        "actives": actives,
    })


PARAMETER_DECODERS: Dict[DecodableContract, Callable[[bytes], DecodedParameters]] = {
    DecodableContract.TRANSFER: decode_transfer,
    DecodableContract.TRANSFER_ASSET: decode_transfer_asset,
    DecodableContract.TRIGGER_SMART_CONTRACT: decode_trigger_smart_contract,
    DecodableContract.ACCOUNT_PERMISSION_UPDATE: decode_account_permission_update,
}

_missing = set(DecodableContract) - set(PARAMETER_DECODERS)
if _missing:
    raise RuntimeError(f"No parameter decoder for: {sorted(m.value for m in _missing)}")


def decode_parameters(hex_payload: str, contract_type: Union[str, DecodableContract]) -> DecodedParameters:
    """
    Decode a hex contract payload into named parameters.

    Args:
        hex_payload: Hex of the contract parameter bytes
        contract_type: Contract message name, e.g. ``"TransferContract"``

    Returns:
        Fresh mapping of field name to decoded value

    Raises:
        UnsupportedContractTypeError: If ``contract_type`` is not decodable
        DecodeError: If the payload is not valid hex or not a valid message
    """
    try:
        kind = DecodableContract(contract_type)
    except ValueError:
        raise UnsupportedContractTypeError(contract_type)

    try:
        payload = hex_to_bytes(hex_payload)
    except EncodingError as e:
        raise DecodeError(f"Invalid payload hex for {kind.value}", cause=e)

    logger.debug("Decoding %s payload (%d bytes)", kind.value, len(payload))
    return PARAMETER_DECODERS[kind](payload)


__all__ = [
    "DecodedParameters",
    "PARAMETER_DECODERS",
    "decode_parameters",
    "decode_transfer",
    "decode_transfer_asset",
    "decode_trigger_smart_contract",
    "decode_account_permission_update",
    "drop_empty",
]
