"""
Transaction construction and reference binding.
"""

from .builders import BaseTxBuilder, BuilderError, get_builder_for, BUILDER_REGISTRY
from .factory import *
from .reference import EXPIRATION_WINDOW_MS, bind, bind_latest, compute_reference

__all__ = [
    "BaseTxBuilder",
    "BuilderError",
    "BUILDER_REGISTRY",
    "get_builder_for",
    "EXPIRATION_WINDOW_MS",
    "bind",
    "bind_latest",
    "compute_reference",
    "DEFAULT_NATIVE_TOKEN",
    "build_transfer",
    "build_transfer_asset",
    "build_send",
    "build_transfer_hex",
    "build_freeze_balance",
    "build_unfreeze_balance",
    "build_unfreeze_asset",
    "build_withdraw_balance",
    "build_vote",
    "build_witness_create",
    "build_witness_update",
    "build_account_update",
    "build_asset_participate",
    "build_asset_issue",
    "build_exchange_create",
    "build_exchange_inject",
    "build_exchange_withdraw",
    "build_exchange_transaction",
    "build_trigger_smart_contract",
    "build_account_permission_update",
]
