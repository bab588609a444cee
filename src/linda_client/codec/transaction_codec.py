"""
Transaction Codec

Serializes contract payloads, ``Transaction.raw`` and signed ``Transaction``
messages to the chain's protobuf wire format, and parses them back.

Layout (field numbers):
    Transaction:           raw_data=1, signature=2 (repeated)
    Transaction.raw:       ref_block_bytes=1, ref_block_hash=4, expiration=8,
                           data=10, contract=11 (repeated), timestamp=14,
                           fee_limit=18
    Transaction.Contract:  type=1, parameter=2 (google.protobuf.Any)
    google.protobuf.Any:   type_url=1, value=2
"""

from __future__ import annotations
from typing import Callable, Dict, List

from ..enums import ContractType
from ..runtime.errors import DecodeError, EncodingError
from ..transactions import (
    AccountPermissionUpdateContract,
    AccountUpdateContract,
    AssetIssueContract,
    ContractBody,
    ExchangeCreateContract,
    ExchangeInjectContract,
    ExchangeTransactionContract,
    ExchangeWithdrawContract,
    FreezeBalanceContract,
    ParticipateAssetIssueContract,
    Permission,
    RawTransaction,
    TransferAssetContract,
    TransferContract,
    TriggerSmartContract,
    UnfreezeAssetContract,
    UnfreezeBalanceContract,
    VoteWitnessContract,
    WithdrawBalanceContract,
    WitnessCreateContract,
    WitnessUpdateContract,
)
from .hashes import transaction_id
from .reader import read_message, to_signed64
from .writer import BinaryWriter


# =============================================================================
# Contract payload encoders
# =============================================================================

def _encode_transfer(c: TransferContract, w: BinaryWriter) -> None:
    w.bytes_field(1, c.owner_address.to_bytes())
    w.bytes_field(2, c.to_address.to_bytes())
    w.varint_field(3, c.amount)


def _encode_transfer_asset(c: TransferAssetContract, w: BinaryWriter) -> None:
    w.string_field(1, c.asset_name)
    w.bytes_field(2, c.owner_address.to_bytes())
    w.bytes_field(3, c.to_address.to_bytes())
    w.varint_field(4, c.amount)


def _encode_freeze(c: FreezeBalanceContract, w: BinaryWriter) -> None:
    w.bytes_field(1, c.owner_address.to_bytes())
    w.varint_field(2, c.frozen_balance)
    w.varint_field(3, c.frozen_duration)
    w.varint_field(10, c.resource)
    if c.receiver_address is not None:
        w.bytes_field(15, c.receiver_address.to_bytes())


def _encode_unfreeze(c: UnfreezeBalanceContract, w: BinaryWriter) -> None:
    w.bytes_field(1, c.owner_address.to_bytes())
    w.varint_field(10, c.resource)
    if c.receiver_address is not None:
        w.bytes_field(15, c.receiver_address.to_bytes())


def _encode_owner_only(c: ContractBody, w: BinaryWriter) -> None:
    w.bytes_field(1, c.owner_address.to_bytes())


def _encode_vote(c: VoteWitnessContract, w: BinaryWriter) -> None:
    w.bytes_field(1, c.owner_address.to_bytes())
    for vote in c.votes:
        vw = BinaryWriter()
        vw.bytes_field(1, vote.vote_address.to_bytes())
        vw.varint_field(2, vote.vote_count)
        w.message_field(2, vw.to_bytes())
    w.varint_field(3, c.support)


def _encode_witness_create(c: WitnessCreateContract, w: BinaryWriter) -> None:
    w.bytes_field(1, c.owner_address.to_bytes())
    w.string_field(2, c.url)


def _encode_witness_update(c: WitnessUpdateContract, w: BinaryWriter) -> None:
    w.bytes_field(1, c.owner_address.to_bytes())
    w.string_field(12, c.update_url)


def _encode_account_update(c: AccountUpdateContract, w: BinaryWriter) -> None:
    w.string_field(1, c.account_name)
    w.bytes_field(2, c.owner_address.to_bytes())


def _encode_asset_issue(c: AssetIssueContract, w: BinaryWriter) -> None:
    w.bytes_field(1, c.owner_address.to_bytes())
    w.string_field(2, c.name)
    w.string_field(3, c.abbr)
    w.varint_field(4, c.total_supply)
    for frozen in c.frozen_supply:
        fw = BinaryWriter()
        fw.varint_field(1, frozen.frozen_amount)
        fw.varint_field(2, frozen.frozen_days)
        w.message_field(5, fw.to_bytes())
    w.varint_field(6, c.trx_num)
    w.varint_field(7, c.precision)
    w.varint_field(8, c.num)
    w.varint_field(9, c.start_time)
    w.varint_field(10, c.end_time)
    w.varint_field(16, c.vote_score)
    w.string_field(20, c.description)
    w.string_field(21, c.url)
    w.varint_field(22, c.free_asset_net_limit)
    w.varint_field(23, c.public_free_asset_net_limit)


def _encode_participate(c: ParticipateAssetIssueContract, w: BinaryWriter) -> None:
    w.bytes_field(1, c.owner_address.to_bytes())
    w.bytes_field(2, c.to_address.to_bytes())
    w.string_field(3, c.asset_name)
    w.varint_field(4, c.amount)


def _encode_exchange_create(c: ExchangeCreateContract, w: BinaryWriter) -> None:
    w.bytes_field(1, c.owner_address.to_bytes())
    w.string_field(2, c.first_token_id)
    w.varint_field(3, c.first_token_balance)
    w.string_field(4, c.second_token_id)
    w.varint_field(5, c.second_token_balance)


def _encode_exchange_inject(c, w: BinaryWriter) -> None:
    # ExchangeInject and ExchangeWithdraw share a layout
    w.bytes_field(1, c.owner_address.to_bytes())
    w.varint_field(2, c.exchange_id)
    w.string_field(3, c.token_id)
    w.varint_field(4, c.quant)


def _encode_exchange_transaction(c: ExchangeTransactionContract, w: BinaryWriter) -> None:
    _encode_exchange_inject(c, w)
    w.varint_field(5, c.expected)


def _encode_trigger(c: TriggerSmartContract, w: BinaryWriter) -> None:
    w.bytes_field(1, c.owner_address.to_bytes())
    w.bytes_field(2, c.contract_address.to_bytes())
    w.varint_field(3, c.call_value)
    w.bytes_field(4, c.data)
    w.varint_field(5, c.call_token_value)
    w.varint_field(6, c.token_id)


def encode_permission(p: Permission) -> bytes:
    """Serialize a ``Permission`` message."""
    w = BinaryWriter()
    w.varint_field(1, p.type)
    w.varint_field(2, p.id)
    w.string_field(3, p.permission_name)
    w.varint_field(4, p.threshold)
    w.varint_field(5, p.parent_id)
    w.bytes_field(6, p.operations)
    for key in p.keys:
        kw = BinaryWriter()
        kw.bytes_field(1, key.address.to_bytes())
        kw.varint_field(2, key.weight)
        w.message_field(7, kw.to_bytes())
    return w.to_bytes()


def _encode_permission_update(c: AccountPermissionUpdateContract, w: BinaryWriter) -> None:
    w.bytes_field(1, c.owner_address.to_bytes())
    w.message_field(2, encode_permission(c.owner))
    if c.witness is not None:
        w.message_field(3, encode_permission(c.witness))
    for active in c.actives:
        w.message_field(4, encode_permission(active))


CONTRACT_ENCODERS: Dict[ContractType, Callable[[ContractBody, BinaryWriter], None]] = {
    ContractType.TRANSFER: _encode_transfer,
    ContractType.TRANSFER_ASSET: _encode_transfer_asset,
    ContractType.FREEZE_BALANCE: _encode_freeze,
    ContractType.UNFREEZE_BALANCE: _encode_unfreeze,
    ContractType.UNFREEZE_ASSET: _encode_owner_only,
    ContractType.VOTE_WITNESS: _encode_vote,
    ContractType.WITNESS_CREATE: _encode_witness_create,
    ContractType.WITNESS_UPDATE: _encode_witness_update,
    ContractType.ACCOUNT_UPDATE: _encode_account_update,
    ContractType.WITHDRAW_BALANCE: _encode_owner_only,
    ContractType.ASSET_ISSUE: _encode_asset_issue,
    ContractType.PARTICIPATE_ASSET_ISSUE: _encode_participate,
    ContractType.EXCHANGE_CREATE: _encode_exchange_create,
    ContractType.EXCHANGE_INJECT: _encode_exchange_inject,
    ContractType.EXCHANGE_WITHDRAW: _encode_exchange_inject,
    ContractType.EXCHANGE_TRANSACTION: _encode_exchange_transaction,
    ContractType.TRIGGER_SMART_CONTRACT: _encode_trigger,
    ContractType.ACCOUNT_PERMISSION_UPDATE: _encode_permission_update,
}


def encode_contract_parameter(contract: ContractBody) -> bytes:
    """
    Serialize a contract payload (the ``Any.value`` bytes).

    Raises:
        EncodingError: If no encoder exists for the contract type
    """
    encoder = CONTRACT_ENCODERS.get(contract.contract_type)
    if encoder is None:
        raise EncodingError(f"No encoder for contract type {contract.contract_type!r}")
    w = BinaryWriter()
    encoder(contract, w)
    return w.to_bytes()


def encode_contract(contract: ContractBody) -> bytes:
    """Serialize a ``Transaction.Contract`` wrapping the payload in an Any."""
    any_w = BinaryWriter()
    any_w.string_field(1, contract.contract_type.type_url)
    any_w.bytes_field(2, encode_contract_parameter(contract))

    w = BinaryWriter()
    w.varint_field(1, contract.contract_type)
    w.message_field(2, any_w.to_bytes())
    return w.to_bytes()


# =============================================================================
# Transaction encoding
# =============================================================================

def serialize_raw(tx: RawTransaction) -> bytes:
    """
    Serialize ``Transaction.raw``.

    Unset binding fields are absent, so an unbound serialization equals the
    bound one with the binding fields (1, 4, 8) removed.
    """
    w = BinaryWriter()
    w.bytes_field(1, tx.ref_block_bytes or b"")
    w.bytes_field(4, tx.ref_block_hash or b"")
    w.varint_field(8, tx.expiration or 0)
    w.bytes_field(10, tx.memo or b"")
    w.message_field(11, encode_contract(tx.contract))
    w.varint_field(14, tx.timestamp)
    w.varint_field(18, tx.fee_limit or 0)
    return w.to_bytes()


def serialize_transaction(tx: RawTransaction) -> bytes:
    """Serialize the full ``Transaction`` including signatures."""
    w = BinaryWriter()
    w.message_field(1, serialize_raw(tx))
    for signature in tx.signatures:
        w.bytes_field(2, signature)
    return w.to_bytes()


def raw_hex(tx: RawTransaction) -> str:
    """Hex of the serialized ``raw_data``."""
    return serialize_raw(tx).hex()


def compute_txid(tx: RawTransaction) -> str:
    """Hex transaction id of ``tx``."""
    return transaction_id(serialize_raw(tx)).hex()


# =============================================================================
# Transaction decoding
# =============================================================================

def _last(fields: Dict[int, list], number: int, default=None):
    values = fields.get(number)
    return values[-1] if values else default


def _expect_bytes(value, what: str) -> bytes:
    if not isinstance(value, bytes):
        raise DecodeError(f"Expected length-delimited {what}")
    return value


def _expect_int(value, what: str) -> int:
    if not isinstance(value, int):
        raise DecodeError(f"Expected varint {what}")
    return to_signed64(value)


def _expect_text(value, what: str) -> str:
    try:
        return _expect_bytes(value, what).decode('utf-8')
    except UnicodeDecodeError as e:
        raise DecodeError(f"Invalid UTF-8 in {what}", cause=e)


class DecodedRaw:
    """
    Wire-level view of ``Transaction.raw``.

    The contract is kept as ``(type, type_url, parameter_bytes)``; use the
    parameter codec to turn the bytes into named fields.
    """

    def __init__(self, fields: Dict[int, list]):
        self.ref_block_bytes: bytes = _expect_bytes(_last(fields, 1, b""), "ref_block_bytes")
        self.ref_block_hash: bytes = _expect_bytes(_last(fields, 4, b""), "ref_block_hash")
        self.expiration: int = _expect_int(_last(fields, 8, 0), "expiration")
        self.memo: bytes = _expect_bytes(_last(fields, 10, b""), "data")
        self.timestamp: int = _expect_int(_last(fields, 14, 0), "timestamp")
        self.fee_limit: int = _expect_int(_last(fields, 18, 0), "fee_limit")
        self.contracts: List[tuple] = []
        for raw_contract in fields.get(11, []):
            contract_fields = read_message(_expect_bytes(raw_contract, "contract"))
            any_bytes = _expect_bytes(_last(contract_fields, 2, b""), "parameter")
            any_fields = read_message(any_bytes)
            self.contracts.append((
                _expect_int(_last(contract_fields, 1, 0), "contract type"),
                _expect_text(_last(any_fields, 1, b""), "type_url"),
                _expect_bytes(_last(any_fields, 2, b""), "value"),
            ))


def parse_raw(data: bytes) -> DecodedRaw:
    """Parse serialized ``Transaction.raw`` bytes."""
    return DecodedRaw(read_message(data))


def parse_transaction(data: bytes) -> tuple:
    """
    Parse a serialized ``Transaction``.

    Returns:
        ``(raw_data_bytes, [signature, ...])``
    """
    fields = read_message(data)
    raw = _expect_bytes(_last(fields, 1, b""), "raw_data")
    signatures = [_expect_bytes(s, "signature") for s in fields.get(2, [])]
    return raw, signatures


__all__ = [
    "CONTRACT_ENCODERS",
    "encode_contract_parameter",
    "encode_contract",
    "encode_permission",
    "serialize_raw",
    "serialize_transaction",
    "raw_hex",
    "compute_txid",
    "DecodedRaw",
    "parse_raw",
    "parse_transaction",
]
