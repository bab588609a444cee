"""
Resource transaction builders.

Freezing balance for bandwidth/energy, unfreezing it, unfreezing locked
asset supply and withdrawing witness rewards.
"""

from __future__ import annotations
from typing import Optional, Union

from ...enums import ResourceCode
from ...runtime.address import Address
from ...transactions import (
    FreezeBalanceContract, UnfreezeAssetContract,
    UnfreezeBalanceContract, WithdrawBalanceContract,
)
from .base import BaseTxBuilder


class FreezeBalanceBuilder(BaseTxBuilder[FreezeBalanceContract]):
    """Builder for FreezeBalance transactions."""

    @property
    def contract_cls(self):
        return FreezeBalanceContract

    def amount(self, amount: int) -> FreezeBalanceBuilder:
        """Set the balance to freeze (in base units)."""
        return self.with_field('frozen_balance', amount)

    def duration(self, days: int) -> FreezeBalanceBuilder:
        """Set the freeze duration in days."""
        return self.with_field('frozen_duration', days)

    def resource(self, resource: Union[ResourceCode, str, int]) -> FreezeBalanceBuilder:
        return self.with_field('resource', resource)

    def receiver(self, address: Optional[Union[str, Address]]) -> FreezeBalanceBuilder:
        """Delegate the frozen resource to another account."""
        return self.with_field('receiver_address', address)


class UnfreezeBalanceBuilder(BaseTxBuilder[UnfreezeBalanceContract]):
    """Builder for UnfreezeBalance transactions."""

    @property
    def contract_cls(self):
        return UnfreezeBalanceContract

    def resource(self, resource: Union[ResourceCode, str, int]) -> UnfreezeBalanceBuilder:
        return self.with_field('resource', resource)

    def receiver(self, address: Optional[Union[str, Address]]) -> UnfreezeBalanceBuilder:
        return self.with_field('receiver_address', address)


class UnfreezeAssetBuilder(BaseTxBuilder[UnfreezeAssetContract]):
    """Builder for UnfreezeAsset transactions."""

    @property
    def contract_cls(self):
        return UnfreezeAssetContract


class WithdrawBalanceBuilder(BaseTxBuilder[WithdrawBalanceContract]):
    """Builder for WithdrawBalance transactions."""

    @property
    def contract_cls(self):
        return WithdrawBalanceContract


__all__ = [
    "FreezeBalanceBuilder",
    "UnfreezeBalanceBuilder",
    "UnfreezeAssetBuilder",
    "WithdrawBalanceBuilder",
]
