"""
Account and witness transaction builders.

Account naming, permission updates, witness registration, witness URL
updates and witness voting.
"""

from __future__ import annotations
from typing import Iterable, List, Mapping, Optional, Union

from ...runtime.address import Address
from ...transactions import (
    AccountPermissionUpdateContract, AccountUpdateContract, Permission,
    VoteWitnessContract, WitnessCreateContract, WitnessUpdateContract,
)
from .base import BaseTxBuilder


class AccountUpdateBuilder(BaseTxBuilder[AccountUpdateContract]):
    """Builder for AccountUpdate (set account name) transactions."""

    @property
    def contract_cls(self):
        return AccountUpdateContract

    def name(self, account_name: str) -> AccountUpdateBuilder:
        return self.with_field('account_name', account_name)


class AccountPermissionUpdateBuilder(BaseTxBuilder[AccountPermissionUpdateContract]):
    """Builder for AccountPermissionUpdate transactions."""

    @property
    def contract_cls(self):
        return AccountPermissionUpdateContract

    def owner_permission(self, permission: Union[Permission, dict]) -> AccountPermissionUpdateBuilder:
        return self.with_field('owner', permission)

    def witness_permission(self, permission: Optional[Union[Permission, dict]]) -> AccountPermissionUpdateBuilder:
        return self.with_field('witness', permission)

    def active_permissions(self, permissions: Iterable[Union[Permission, dict]]) -> AccountPermissionUpdateBuilder:
        return self.with_field('actives', list(permissions))


class WitnessCreateBuilder(BaseTxBuilder[WitnessCreateContract]):
    """Builder for WitnessCreate (apply for delegate) transactions."""

    @property
    def contract_cls(self):
        return WitnessCreateContract

    def url(self, url: str) -> WitnessCreateBuilder:
        return self.with_field('url', url)


class WitnessUpdateBuilder(BaseTxBuilder[WitnessUpdateContract]):
    """Builder for WitnessUpdate transactions."""

    @property
    def contract_cls(self):
        return WitnessUpdateContract

    def url(self, url: str) -> WitnessUpdateBuilder:
        return self.with_field('update_url', url)


class VoteWitnessBuilder(BaseTxBuilder[VoteWitnessContract]):
    """Builder for VoteWitness transactions."""

    def __init__(self):
        super().__init__()
        self._votes: List[dict] = []

    @property
    def contract_cls(self):
        return VoteWitnessContract

    def vote(self, witness: Union[str, Address], count: int) -> VoteWitnessBuilder:
        """Add one vote (chainable)."""
        self._votes.append({'vote_address': witness, 'vote_count': count})
        return self.with_field('votes', list(self._votes))

    def votes(self, votes: Mapping[str, int]) -> VoteWitnessBuilder:
        """Replace all votes with ``{witness_address: count}``."""
        self._votes = [
            {'vote_address': witness, 'vote_count': count}
            for witness, count in votes.items()
        ]
        return self.with_field('votes', list(self._votes))

    def clone(self) -> VoteWitnessBuilder:
        cloned = super().clone()
        cloned._votes = list(self._votes)
        return cloned

    def reset(self) -> VoteWitnessBuilder:
        self._votes = []
        return super().reset()


__all__ = [
    "AccountUpdateBuilder",
    "AccountPermissionUpdateBuilder",
    "WitnessCreateBuilder",
    "WitnessUpdateBuilder",
    "VoteWitnessBuilder",
]
