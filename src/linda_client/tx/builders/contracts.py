"""
Smart contract transaction builders.
"""

from __future__ import annotations
from typing import Union

from ...runtime.address import Address
from ...transactions import TriggerSmartContract
from .base import BaseTxBuilder


class TriggerSmartContractBuilder(BaseTxBuilder[TriggerSmartContract]):
    """Builder for TriggerSmartContract transactions."""

    @property
    def contract_cls(self):
        return TriggerSmartContract

    def contract(self, address: Union[str, Address]) -> TriggerSmartContractBuilder:
        """Set the called contract's address."""
        return self.with_field('contract_address', address)

    def data(self, data: Union[bytes, str]) -> TriggerSmartContractBuilder:
        """Set ABI-encoded call data (bytes or hex)."""
        return self.with_field('data', data)

    def call_value(self, value: int) -> TriggerSmartContractBuilder:
        return self.with_field('call_value', value)

    def call_token(self, token_id: int, value: int) -> TriggerSmartContractBuilder:
        """Send an issued token along with the call."""
        self.with_field('token_id', token_id)
        return self.with_field('call_token_value', value)


__all__ = [
    "TriggerSmartContractBuilder",
]
