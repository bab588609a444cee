"""
Transaction builders.

One builder per contract type, grouped by domain.
"""

from .base import BaseTxBuilder, BuilderError
from .tokens import *
from .resources import *
from .accounts import *
from .exchange import *
from .contracts import *

from .registry import get_builder_for, list_contract_types, register_builder, BUILDER_REGISTRY

__all__ = [
    "BaseTxBuilder",
    "BuilderError",
    "BUILDER_REGISTRY",
    "register_builder",
    "get_builder_for",
    "list_contract_types",
    "TransferBuilder",
    "TransferAssetBuilder",
    "AssetIssueBuilder",
    "ParticipateAssetIssueBuilder",
    "FreezeBalanceBuilder",
    "UnfreezeBalanceBuilder",
    "UnfreezeAssetBuilder",
    "WithdrawBalanceBuilder",
    "AccountUpdateBuilder",
    "AccountPermissionUpdateBuilder",
    "WitnessCreateBuilder",
    "WitnessUpdateBuilder",
    "VoteWitnessBuilder",
    "ExchangeCreateBuilder",
    "ExchangeInjectBuilder",
    "ExchangeWithdrawBuilder",
    "ExchangeTransactionBuilder",
    "TriggerSmartContractBuilder",
]
