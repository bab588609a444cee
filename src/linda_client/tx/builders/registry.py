"""
Transaction builder registry.

Maps every contract type to its builder class.
"""

from typing import Dict, List, Type, Union

from ...enums import ContractType
from ...runtime.errors import UnsupportedContractTypeError
from .base import BaseTxBuilder
from .accounts import (
    AccountPermissionUpdateBuilder, AccountUpdateBuilder, VoteWitnessBuilder,
    WitnessCreateBuilder, WitnessUpdateBuilder,
)
from .contracts import TriggerSmartContractBuilder
from .exchange import (
    ExchangeCreateBuilder, ExchangeInjectBuilder,
    ExchangeTransactionBuilder, ExchangeWithdrawBuilder,
)
from .resources import (
    FreezeBalanceBuilder, UnfreezeAssetBuilder,
    UnfreezeBalanceBuilder, WithdrawBalanceBuilder,
)
from .tokens import (
    AssetIssueBuilder, ParticipateAssetIssueBuilder,
    TransferAssetBuilder, TransferBuilder,
)

BUILDER_REGISTRY: Dict[ContractType, Type[BaseTxBuilder]] = {
    ContractType.TRANSFER: TransferBuilder,
    ContractType.TRANSFER_ASSET: TransferAssetBuilder,
    ContractType.VOTE_WITNESS: VoteWitnessBuilder,
    ContractType.WITNESS_CREATE: WitnessCreateBuilder,
    ContractType.ASSET_ISSUE: AssetIssueBuilder,
    ContractType.WITNESS_UPDATE: WitnessUpdateBuilder,
    ContractType.PARTICIPATE_ASSET_ISSUE: ParticipateAssetIssueBuilder,
    ContractType.ACCOUNT_UPDATE: AccountUpdateBuilder,
    ContractType.FREEZE_BALANCE: FreezeBalanceBuilder,
    ContractType.UNFREEZE_BALANCE: UnfreezeBalanceBuilder,
    ContractType.WITHDRAW_BALANCE: WithdrawBalanceBuilder,
    ContractType.UNFREEZE_ASSET: UnfreezeAssetBuilder,
    ContractType.TRIGGER_SMART_CONTRACT: TriggerSmartContractBuilder,
    ContractType.EXCHANGE_CREATE: ExchangeCreateBuilder,
    ContractType.EXCHANGE_INJECT: ExchangeInjectBuilder,
    ContractType.EXCHANGE_WITHDRAW: ExchangeWithdrawBuilder,
    ContractType.EXCHANGE_TRANSACTION: ExchangeTransactionBuilder,
    ContractType.ACCOUNT_PERMISSION_UPDATE: AccountPermissionUpdateBuilder,
}


def _resolve(contract_type: Union[ContractType, int, str]) -> ContractType:
    if isinstance(contract_type, ContractType):
        return contract_type
    try:
        if isinstance(contract_type, str):
            return ContractType.from_message_name(contract_type)
        return ContractType(contract_type)
    except ValueError:
        raise UnsupportedContractTypeError(contract_type)


def get_builder_for(contract_type: Union[ContractType, int, str]) -> BaseTxBuilder:
    """
    Get a transaction builder for the specified contract type.

    Args:
        contract_type: ContractType, wire value or message name
            (e.g. 'TransferContract')

    Returns:
        Transaction builder instance

    Raises:
        UnsupportedContractTypeError: If no builder handles the type
    """
    resolved = _resolve(contract_type)
    builder_cls = BUILDER_REGISTRY.get(resolved)
    if builder_cls is None:
        raise UnsupportedContractTypeError(contract_type)
    return builder_cls()


def list_contract_types() -> List[ContractType]:
    return list(BUILDER_REGISTRY.keys())


def register_builder(contract_type: ContractType, builder_cls: Type[BaseTxBuilder]) -> None:
    """Register (or replace) the builder for a contract type."""
    BUILDER_REGISTRY[contract_type] = builder_cls


__all__ = [
    'BUILDER_REGISTRY',
    'get_builder_for',
    'list_contract_types',
    'register_builder',
]
