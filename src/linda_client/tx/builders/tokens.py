"""
Token transaction builders.

Native transfers, asset transfers, asset issuance and asset participation.
"""

from __future__ import annotations
from typing import Iterable, Mapping, Union

from ...runtime.address import Address
from ...transactions import (
    AssetIssueContract, FrozenSupply, ParticipateAssetIssueContract,
    TransferAssetContract, TransferContract,
)
from .base import BaseTxBuilder


class TransferBuilder(BaseTxBuilder[TransferContract]):
    """Builder for native token transfers."""

    @property
    def contract_cls(self):
        return TransferContract

    def to(self, address: Union[str, Address]) -> TransferBuilder:
        """Set the recipient address."""
        return self.with_field('to_address', address)

    def amount(self, amount: int) -> TransferBuilder:
        """Set the amount to send (in base units)."""
        return self.with_field('amount', amount)


class TransferAssetBuilder(BaseTxBuilder[TransferAssetContract]):
    """Builder for issued-asset transfers."""

    @property
    def contract_cls(self):
        return TransferAssetContract

    def asset(self, asset_name: str) -> TransferAssetBuilder:
        """Set the asset name or id."""
        return self.with_field('asset_name', asset_name)

    def to(self, address: Union[str, Address]) -> TransferAssetBuilder:
        return self.with_field('to_address', address)

    def amount(self, amount: int) -> TransferAssetBuilder:
        return self.with_field('amount', amount)


class AssetIssueBuilder(BaseTxBuilder[AssetIssueContract]):
    """Builder for asset issuance."""

    @property
    def contract_cls(self):
        return AssetIssueContract

    def name(self, name: str) -> AssetIssueBuilder:
        return self.with_field('name', name)

    def abbr(self, abbr: str) -> AssetIssueBuilder:
        return self.with_field('abbr', abbr)

    def total_supply(self, total_supply: int) -> AssetIssueBuilder:
        return self.with_field('total_supply', total_supply)

    def exchange_rate(self, trx_num: int, num: int) -> AssetIssueBuilder:
        """Set the sale price: ``trx_num`` native units buy ``num`` asset units."""
        self.with_field('trx_num', trx_num)
        return self.with_field('num', num)

    def sale_window(self, start_time: int, end_time: int) -> AssetIssueBuilder:
        """Set the participation window (ms since epoch)."""
        self.with_field('start_time', start_time)
        return self.with_field('end_time', end_time)

    def precision(self, precision: int) -> AssetIssueBuilder:
        return self.with_field('precision', precision)

    def description(self, description: str) -> AssetIssueBuilder:
        return self.with_field('description', description)

    def url(self, url: str) -> AssetIssueBuilder:
        return self.with_field('url', url)

    def net_limits(self, free_asset_net_limit: int = 0, public_free_asset_net_limit: int = 0) -> AssetIssueBuilder:
        self.with_field('free_asset_net_limit', free_asset_net_limit)
        return self.with_field('public_free_asset_net_limit', public_free_asset_net_limit)

    def frozen_supply(self, frozen: Union[Mapping[int, int], Iterable[FrozenSupply]]) -> AssetIssueBuilder:
        """
        Set locked supply.

        Accepts ``{days: amount}`` or an iterable of ``FrozenSupply``.
        """
        if isinstance(frozen, Mapping):
            frozen = [
                {'frozen_amount': amount, 'frozen_days': days}
                for days, amount in frozen.items()
            ]
        return self.with_field('frozen_supply', list(frozen))


class ParticipateAssetIssueBuilder(BaseTxBuilder[ParticipateAssetIssueContract]):
    """Builder for buying into an asset issue."""

    @property
    def contract_cls(self):
        return ParticipateAssetIssueContract

    def issuer(self, address: Union[str, Address]) -> ParticipateAssetIssueBuilder:
        """Set the issuer's address."""
        return self.with_field('to_address', address)

    def asset(self, asset_name: str) -> ParticipateAssetIssueBuilder:
        return self.with_field('asset_name', asset_name)

    def amount(self, amount: int) -> ParticipateAssetIssueBuilder:
        """Set the native amount spent."""
        return self.with_field('amount', amount)


__all__ = [
    "TransferBuilder",
    "TransferAssetBuilder",
    "AssetIssueBuilder",
    "ParticipateAssetIssueBuilder",
]
