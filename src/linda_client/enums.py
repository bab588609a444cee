# Enumerations for the chain's transaction schema.
# Numeric values are the wire values of the protobuf enums.

from __future__ import annotations
from enum import Enum, IntEnum


class ContractType(IntEnum):
    """Transaction.Contract.ContractType."""

    TRANSFER = 1
    TRANSFER_ASSET = 2
    VOTE_WITNESS = 4
    WITNESS_CREATE = 5
    ASSET_ISSUE = 6
    WITNESS_UPDATE = 8
    PARTICIPATE_ASSET_ISSUE = 9
    ACCOUNT_UPDATE = 10
    FREEZE_BALANCE = 11
    UNFREEZE_BALANCE = 12
    WITHDRAW_BALANCE = 13
    UNFREEZE_ASSET = 14
    TRIGGER_SMART_CONTRACT = 31
    EXCHANGE_CREATE = 41
    EXCHANGE_INJECT = 42
    EXCHANGE_WITHDRAW = 43
    EXCHANGE_TRANSACTION = 44
    ACCOUNT_PERMISSION_UPDATE = 46

    @property
    def message_name(self) -> str:
        """Protobuf message name, e.g. ``TransferContract``."""
        return _MESSAGE_NAMES[self]

    @property
    def type_url(self) -> str:
        """``google.protobuf.Any`` type URL of the contract parameter."""
        return f"type.googleapis.com/protocol.{self.message_name}"

    @classmethod
    def from_message_name(cls, name: str) -> ContractType:
        for member, message_name in _MESSAGE_NAMES.items():
            if message_name == name:
                return member
        raise ValueError(f"Unknown contract message name: {name}")


_MESSAGE_NAMES = {
    ContractType.TRANSFER: "TransferContract",
    ContractType.TRANSFER_ASSET: "TransferAssetContract",
    ContractType.VOTE_WITNESS: "VoteWitnessContract",
    ContractType.WITNESS_CREATE: "WitnessCreateContract",
    ContractType.ASSET_ISSUE: "AssetIssueContract",
    ContractType.WITNESS_UPDATE: "WitnessUpdateContract",
    ContractType.PARTICIPATE_ASSET_ISSUE: "ParticipateAssetIssueContract",
    ContractType.ACCOUNT_UPDATE: "AccountUpdateContract",
    ContractType.FREEZE_BALANCE: "FreezeBalanceContract",
    ContractType.UNFREEZE_BALANCE: "UnfreezeBalanceContract",
    ContractType.WITHDRAW_BALANCE: "WithdrawBalanceContract",
    ContractType.UNFREEZE_ASSET: "UnfreezeAssetContract",
    ContractType.TRIGGER_SMART_CONTRACT: "TriggerSmartContract",
    ContractType.EXCHANGE_CREATE: "ExchangeCreateContract",
    ContractType.EXCHANGE_INJECT: "ExchangeInjectContract",
    ContractType.EXCHANGE_WITHDRAW: "ExchangeWithdrawContract",
    ContractType.EXCHANGE_TRANSACTION: "ExchangeTransactionContract",
    ContractType.ACCOUNT_PERMISSION_UPDATE: "AccountPermissionUpdateContract",
}


class ResourceCode(IntEnum):
    """Resource a freeze/unfreeze applies to."""

    BANDWIDTH = 0
    ENERGY = 1


class PermissionType(IntEnum):
    """Permission.PermissionType."""

    OWNER = 0
    WITNESS = 1
    ACTIVE = 2


class DecodableContract(str, Enum):
    """
    Contract types the parameter codec can decode.

    Values are the names callers pass in (the protobuf message names).
    """

    TRANSFER = "TransferContract"
    TRANSFER_ASSET = "TransferAssetContract"
    TRIGGER_SMART_CONTRACT = "TriggerSmartContract"
    ACCOUNT_PERMISSION_UPDATE = "AccountPermissionUpdateContract"


__all__ = [
    "ContractType",
    "ResourceCode",
    "PermissionType",
    "DecodableContract",
]
