"""
Exchange transaction builders.

Bancor-style exchange pairs: create a pair, inject or withdraw liquidity,
and trade against a pair.
"""

from __future__ import annotations

from ...transactions import (
    ExchangeCreateContract, ExchangeInjectContract,
    ExchangeTransactionContract, ExchangeWithdrawContract,
)
from .base import BaseTxBuilder


class ExchangeCreateBuilder(BaseTxBuilder[ExchangeCreateContract]):
    """Builder for ExchangeCreate transactions."""

    @property
    def contract_cls(self):
        return ExchangeCreateContract

    def first(self, token_id: str, balance: int) -> ExchangeCreateBuilder:
        self.with_field('first_token_id', token_id)
        return self.with_field('first_token_balance', balance)

    def second(self, token_id: str, balance: int) -> ExchangeCreateBuilder:
        self.with_field('second_token_id', token_id)
        return self.with_field('second_token_balance', balance)


class _ExchangeQuantBuilder(BaseTxBuilder):
    """Shared setters for contracts addressing one token of an exchange."""

    def exchange(self, exchange_id: int):
        return self.with_field('exchange_id', exchange_id)

    def token(self, token_id: str):
        return self.with_field('token_id', token_id)

    def quant(self, quant: int):
        return self.with_field('quant', quant)


class ExchangeInjectBuilder(_ExchangeQuantBuilder):
    """Builder for ExchangeInject transactions."""

    @property
    def contract_cls(self):
        return ExchangeInjectContract


class ExchangeWithdrawBuilder(_ExchangeQuantBuilder):
    """Builder for ExchangeWithdraw transactions."""

    @property
    def contract_cls(self):
        return ExchangeWithdrawContract


class ExchangeTransactionBuilder(_ExchangeQuantBuilder):
    """Builder for ExchangeTransaction (trade) transactions."""

    @property
    def contract_cls(self):
        return ExchangeTransactionContract

    def expected(self, expected: int) -> ExchangeTransactionBuilder:
        """Set the minimum amount of the other token to receive."""
        return self.with_field('expected', expected)


__all__ = [
    "ExchangeCreateBuilder",
    "ExchangeInjectBuilder",
    "ExchangeWithdrawBuilder",
    "ExchangeTransactionBuilder",
]
