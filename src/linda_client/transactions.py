# Transaction and contract type definitions.
# Field names and numbering follow the chain's protobuf schema (protocol.*).

from __future__ import annotations
from typing import Annotated, Any, ClassVar, List, Optional

from pydantic import BaseModel, Field, field_validator

from .enums import ContractType, PermissionType, ResourceCode
from .runtime.address import Address

INT64_MAX = 2 ** 63 - 1
INT32_MAX = 2 ** 31 - 1

# strict: rejects bool, float and numeric strings
Amount = Annotated[int, Field(strict=True, ge=0, le=INT64_MAX)]
Count32 = Annotated[int, Field(strict=True, ge=0, le=INT32_MAX)]


def _coerce_bytes(value: Any) -> Any:
    """Accept hex strings where a bytes field is expected."""
    if isinstance(value, str):
        hex_str = value[2:] if value[:2] in ("0x", "0X") else value
        try:
            return bytes.fromhex(hex_str)
        except ValueError:
            raise ValueError(f"Invalid hex string: {value!r}")
    if isinstance(value, bytearray):
        return bytes(value)
    return value


def _coerce_enum(enum_cls, value: Any) -> Any:
    """Accept enum member names ("ENERGY") as well as members and wire values."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid {enum_cls.__name__}: {value!r}")
    if isinstance(value, str):
        try:
            return enum_cls[value.upper()]
        except KeyError:
            raise ValueError(f"Invalid {enum_cls.__name__}: {value!r}")
    return value


# =============================================================================
# Contract payloads
# =============================================================================

class ContractBody(BaseModel):
    """
    Base class for contract payloads.

    Each subclass is one variant of the closed contract set and owns only
    the fields of its operation. Instances are immutable.
    """

    contract_type: ClassVar[ContractType]

    model_config = {"frozen": True, "populate_by_name": True}


class TransferContract(ContractBody):
    """Native token transfer."""
    contract_type: ClassVar[ContractType] = ContractType.TRANSFER

    owner_address: Address
    to_address: Address
    amount: Amount


class TransferAssetContract(ContractBody):
    """Transfer of an issued asset."""
    contract_type: ClassVar[ContractType] = ContractType.TRANSFER_ASSET

    asset_name: str = Field(min_length=1)
    owner_address: Address
    to_address: Address
    amount: Amount


class FreezeBalanceContract(ContractBody):
    contract_type: ClassVar[ContractType] = ContractType.FREEZE_BALANCE

    owner_address: Address
    frozen_balance: Amount
    frozen_duration: Amount
    resource: ResourceCode = ResourceCode.BANDWIDTH
    receiver_address: Optional[Address] = None

    @field_validator('resource', mode='before')
    @classmethod
    def parse_resource(cls, v: Any) -> Any:
        return _coerce_enum(ResourceCode, v)


class UnfreezeBalanceContract(ContractBody):
    contract_type: ClassVar[ContractType] = ContractType.UNFREEZE_BALANCE

    owner_address: Address
    resource: ResourceCode = ResourceCode.BANDWIDTH
    receiver_address: Optional[Address] = None

    @field_validator('resource', mode='before')
    @classmethod
    def parse_resource(cls, v: Any) -> Any:
        return _coerce_enum(ResourceCode, v)


class UnfreezeAssetContract(ContractBody):
    contract_type: ClassVar[ContractType] = ContractType.UNFREEZE_ASSET

    owner_address: Address


class Vote(BaseModel):
    """One witness vote."""
    vote_address: Address
    vote_count: Amount

    model_config = {"frozen": True}


class VoteWitnessContract(ContractBody):
    contract_type: ClassVar[ContractType] = ContractType.VOTE_WITNESS

    owner_address: Address
    votes: List[Vote] = Field(min_length=1)
    support: bool = False


class WitnessCreateContract(ContractBody):
    contract_type: ClassVar[ContractType] = ContractType.WITNESS_CREATE

    owner_address: Address
    url: str = Field(min_length=1)


class WitnessUpdateContract(ContractBody):
    contract_type: ClassVar[ContractType] = ContractType.WITNESS_UPDATE

    owner_address: Address
    update_url: str = Field(min_length=1)


class AccountUpdateContract(ContractBody):
    contract_type: ClassVar[ContractType] = ContractType.ACCOUNT_UPDATE

    account_name: str = Field(min_length=1)
    owner_address: Address


class WithdrawBalanceContract(ContractBody):
    contract_type: ClassVar[ContractType] = ContractType.WITHDRAW_BALANCE

    owner_address: Address


class FrozenSupply(BaseModel):
    """Part of an issued asset's supply locked for a number of days."""
    frozen_amount: Amount
    frozen_days: Amount

    model_config = {"frozen": True}


class AssetIssueContract(ContractBody):
    """
    Issue a new asset.

    ``trx_num`` native units buy ``num`` asset units during the
    ``[start_time, end_time]`` window (milliseconds since epoch).
    """
    contract_type: ClassVar[ContractType] = ContractType.ASSET_ISSUE

    owner_address: Address
    name: str = Field(min_length=1)
    abbr: str = ""
    total_supply: Amount
    frozen_supply: List[FrozenSupply] = Field(default_factory=list)
    trx_num: Count32
    precision: Count32 = 0
    num: Count32
    start_time: Amount
    end_time: Amount
    vote_score: Count32 = 0
    description: str = ""
    url: str = ""
    free_asset_net_limit: Amount = 0
    public_free_asset_net_limit: Amount = 0


class ParticipateAssetIssueContract(ContractBody):
    contract_type: ClassVar[ContractType] = ContractType.PARTICIPATE_ASSET_ISSUE

    owner_address: Address
    to_address: Address
    asset_name: str = Field(min_length=1)
    amount: Amount


class ExchangeCreateContract(ContractBody):
    contract_type: ClassVar[ContractType] = ContractType.EXCHANGE_CREATE

    owner_address: Address
    first_token_id: str = Field(min_length=1)
    first_token_balance: Amount
    second_token_id: str = Field(min_length=1)
    second_token_balance: Amount


class ExchangeInjectContract(ContractBody):
    contract_type: ClassVar[ContractType] = ContractType.EXCHANGE_INJECT

    owner_address: Address
    exchange_id: Amount
    token_id: str = Field(min_length=1)
    quant: Amount


class ExchangeWithdrawContract(ContractBody):
    contract_type: ClassVar[ContractType] = ContractType.EXCHANGE_WITHDRAW

    owner_address: Address
    exchange_id: Amount
    token_id: str = Field(min_length=1)
    quant: Amount


class ExchangeTransactionContract(ContractBody):
    contract_type: ClassVar[ContractType] = ContractType.EXCHANGE_TRANSACTION

    owner_address: Address
    exchange_id: Amount
    token_id: str = Field(min_length=1)
    quant: Amount
    expected: Amount


class TriggerSmartContract(ContractBody):
    """Call a deployed smart contract with ABI-encoded ``data``."""
    contract_type: ClassVar[ContractType] = ContractType.TRIGGER_SMART_CONTRACT

    owner_address: Address
    contract_address: Address
    call_value: Amount = 0
    data: bytes = b""
    call_token_value: Amount = 0
    token_id: Amount = 0

    @field_validator('data', mode='before')
    @classmethod
    def parse_data(cls, v: Any) -> Any:
        return _coerce_bytes(v)


class PermissionKey(BaseModel):
    address: Address
    weight: Amount

    model_config = {"frozen": True}


class Permission(BaseModel):
    type: PermissionType = PermissionType.OWNER
    id: Count32 = 0
    permission_name: str = ""
    threshold: Amount
    parent_id: Count32 = 0
    operations: bytes = b""
    keys: List[PermissionKey] = Field(min_length=1)

    model_config = {"frozen": True}

    @field_validator('type', mode='before')
    @classmethod
    def parse_type(cls, v: Any) -> Any:
        return _coerce_enum(PermissionType, v)

    @field_validator('operations', mode='before')
    @classmethod
    def parse_operations(cls, v: Any) -> Any:
        return _coerce_bytes(v)


class AccountPermissionUpdateContract(ContractBody):
    contract_type: ClassVar[ContractType] = ContractType.ACCOUNT_PERMISSION_UPDATE

    owner_address: Address
    owner: Permission
    witness: Optional[Permission] = None
    actives: List[Permission] = Field(default_factory=list)


CONTRACT_MODELS = {
    model.contract_type: model
    for model in (
        TransferContract,
        TransferAssetContract,
        FreezeBalanceContract,
        UnfreezeBalanceContract,
        UnfreezeAssetContract,
        VoteWitnessContract,
        WitnessCreateContract,
        WitnessUpdateContract,
        AccountUpdateContract,
        WithdrawBalanceContract,
        AssetIssueContract,
        ParticipateAssetIssueContract,
        ExchangeCreateContract,
        ExchangeInjectContract,
        ExchangeWithdrawContract,
        ExchangeTransactionContract,
        TriggerSmartContract,
        AccountPermissionUpdateContract,
    )
}


# =============================================================================
# Transaction, block reference and envelope
# =============================================================================

class RawTransaction(BaseModel):
    """
    Unsigned transaction.

    ``ref_block_bytes``, ``ref_block_hash`` and ``expiration`` stay unset until
    the reference binder fills them; signers refuse unbound transactions.
    """
    contract: ContractBody
    timestamp: Amount
    expiration: Optional[int] = None
    ref_block_bytes: Optional[bytes] = None
    ref_block_hash: Optional[bytes] = None
    memo: Optional[bytes] = None
    fee_limit: Optional[Amount] = None
    signatures: List[bytes] = Field(default_factory=list)

    @property
    def contract_type(self) -> ContractType:
        return self.contract.contract_type

    @property
    def is_bound(self) -> bool:
        return bool(self.ref_block_bytes) and bool(self.ref_block_hash) and self.expiration is not None


class BlockReference(BaseModel):
    """Latest-block summary supplied by the network gateway."""
    number: Annotated[int, Field(ge=0)]
    hash: str
    timestamp_ms: Annotated[int, Field(ge=0, alias="timestamp")]

    model_config = {"frozen": True, "populate_by_name": True}


class SignedEnvelope(BaseModel):
    """Serialized, signed transaction ready for broadcast."""
    hex: str
    txid: str

    model_config = {"frozen": True}


class BroadcastResult(BaseModel):
    """Node answer to a broadcast."""
    result: bool
    txid: Optional[str] = None
    message: Optional[str] = None

    model_config = {"populate_by_name": True, "extra": "allow"}


__all__ = [
    "Amount",
    "ContractBody",
    "TransferContract",
    "TransferAssetContract",
    "FreezeBalanceContract",
    "UnfreezeBalanceContract",
    "UnfreezeAssetContract",
    "Vote",
    "VoteWitnessContract",
    "WitnessCreateContract",
    "WitnessUpdateContract",
    "AccountUpdateContract",
    "WithdrawBalanceContract",
    "FrozenSupply",
    "AssetIssueContract",
    "ParticipateAssetIssueContract",
    "ExchangeCreateContract",
    "ExchangeInjectContract",
    "ExchangeWithdrawContract",
    "ExchangeTransactionContract",
    "TriggerSmartContract",
    "PermissionKey",
    "Permission",
    "AccountPermissionUpdateContract",
    "CONTRACT_MODELS",
    "RawTransaction",
    "BlockReference",
    "SignedEnvelope",
    "BroadcastResult",
]
