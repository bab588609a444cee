"""
Transaction factory functions.

One constructor per contract type. Each returns an unsigned, unbound
``RawTransaction`` and raises ``BuilderError`` (an ``InvalidArgumentError``)
on malformed input.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from ..codec.transaction_codec import raw_hex
from ..enums import ResourceCode
from ..transactions import Permission, RawTransaction
from .builders import (
    AccountPermissionUpdateBuilder, AccountUpdateBuilder, AssetIssueBuilder,
    ExchangeCreateBuilder, ExchangeInjectBuilder, ExchangeTransactionBuilder,
    ExchangeWithdrawBuilder, FreezeBalanceBuilder, ParticipateAssetIssueBuilder,
    TransferAssetBuilder, TransferBuilder, TriggerSmartContractBuilder,
    UnfreezeAssetBuilder, UnfreezeBalanceBuilder, VoteWitnessBuilder,
    WithdrawBalanceBuilder, WitnessCreateBuilder, WitnessUpdateBuilder,
)

DEFAULT_NATIVE_TOKEN = "TRX"

Resource = Union[ResourceCode, str, int]


def build_transfer(from_address: str, to_address: str, amount: int,
                   timestamp: Optional[int] = None) -> RawTransaction:
    """Native token transfer."""
    return (TransferBuilder()
            .owner(from_address)
            .to(to_address)
            .amount(amount)
            .build(timestamp=timestamp))


def build_transfer_asset(token: str, from_address: str, to_address: str, amount: int,
                         timestamp: Optional[int] = None) -> RawTransaction:
    """Issued-asset transfer of ``amount`` units of ``token``."""
    return (TransferAssetBuilder()
            .asset(token)
            .owner(from_address)
            .to(to_address)
            .amount(amount)
            .build(timestamp=timestamp))


def build_send(token: str, from_address: str, to_address: str, amount: int,
               native_token: str = DEFAULT_NATIVE_TOKEN,
               timestamp: Optional[int] = None) -> RawTransaction:
    """
    Build a transfer of ``token``.

    The native token produces a TransferContract; any other token name is
    treated as an issued asset and produces a TransferAssetContract.
    """
    if token == native_token:
        return build_transfer(from_address, to_address, amount, timestamp=timestamp)
    return build_transfer_asset(token, from_address, to_address, amount, timestamp=timestamp)


def build_transfer_hex(token: str, from_address: str, to_address: str, amount: int,
                       native_token: str = DEFAULT_NATIVE_TOKEN,
                       timestamp: Optional[int] = None) -> str:
    """
    Offline preview of a transfer.

    Returns the hex of the unbound ``raw_data``: the same bytes a bound,
    unsigned serialization produces, minus the binding fields.
    """
    tx = build_send(token, from_address, to_address, amount,
                    native_token=native_token, timestamp=timestamp)
    return raw_hex(tx)


def build_freeze_balance(address: str, amount: int, duration: int,
                         resource: Resource = ResourceCode.BANDWIDTH,
                         receiver: Optional[str] = None,
                         timestamp: Optional[int] = None) -> RawTransaction:
    builder = (FreezeBalanceBuilder()
               .owner(address)
               .amount(amount)
               .duration(duration)
               .resource(resource))
    if receiver:
        builder.receiver(receiver)
    return builder.build(timestamp=timestamp)


def build_unfreeze_balance(address: str, resource: Resource = ResourceCode.BANDWIDTH,
                           receiver: Optional[str] = None,
                           timestamp: Optional[int] = None) -> RawTransaction:
    builder = UnfreezeBalanceBuilder().owner(address).resource(resource)
    if receiver:
        builder.receiver(receiver)
    return builder.build(timestamp=timestamp)


def build_unfreeze_asset(address: str, timestamp: Optional[int] = None) -> RawTransaction:
    return UnfreezeAssetBuilder().owner(address).build(timestamp=timestamp)


def build_withdraw_balance(address: str, timestamp: Optional[int] = None) -> RawTransaction:
    """Withdraw accumulated witness rewards."""
    return WithdrawBalanceBuilder().owner(address).build(timestamp=timestamp)


def build_vote(address: str, votes: Mapping[str, int],
               timestamp: Optional[int] = None) -> RawTransaction:
    """
    Vote for witnesses.

    Args:
        address: Voter address
        votes: ``{witness_address: vote_count}``, at least one entry
    """
    return VoteWitnessBuilder().owner(address).votes(votes).build(timestamp=timestamp)


def build_witness_create(address: str, url: str, timestamp: Optional[int] = None) -> RawTransaction:
    """Apply to become a witness (delegate)."""
    return WitnessCreateBuilder().owner(address).url(url).build(timestamp=timestamp)


def build_witness_update(address: str, url: str, timestamp: Optional[int] = None) -> RawTransaction:
    return WitnessUpdateBuilder().owner(address).url(url).build(timestamp=timestamp)


def build_account_update(address: str, name: str, timestamp: Optional[int] = None) -> RawTransaction:
    return AccountUpdateBuilder().owner(address).name(name).build(timestamp=timestamp)


def build_asset_participate(address: str, issuer_address: str, token: str, amount: int,
                            timestamp: Optional[int] = None) -> RawTransaction:
    """Buy into ``token`` from its issuer, spending ``amount`` native units."""
    return (ParticipateAssetIssueBuilder()
            .owner(address)
            .issuer(issuer_address)
            .asset(token)
            .amount(amount)
            .build(timestamp=timestamp))


def build_asset_issue(options: Dict[str, Any], timestamp: Optional[int] = None) -> RawTransaction:
    """
    Issue a new asset.

    ``options`` uses the AssetIssueContract field names (``owner_address``,
    ``name``, ``total_supply``, ``trx_num``, ``num``, ``start_time``,
    ``end_time`` and optionally ``abbr``, ``precision``, ``description``,
    ``url``, ``frozen_supply``, ``free_asset_net_limit``,
    ``public_free_asset_net_limit``). ``frozen_supply`` may also be given
    as ``{days: amount}``.
    """
    builder = AssetIssueBuilder()
    for name, value in options.items():
        if name == 'frozen_supply':
            builder.frozen_supply(value)
        else:
            builder.with_field(name, value)
    return builder.build(timestamp=timestamp)


def build_exchange_create(address: str, first_token_id: str, second_token_id: str,
                          first_token_balance: int, second_token_balance: int,
                          timestamp: Optional[int] = None) -> RawTransaction:
    return (ExchangeCreateBuilder()
            .owner(address)
            .first(first_token_id, first_token_balance)
            .second(second_token_id, second_token_balance)
            .build(timestamp=timestamp))


def build_exchange_inject(address: str, exchange_id: int, token_id: str, quant: int,
                          timestamp: Optional[int] = None) -> RawTransaction:
    return (ExchangeInjectBuilder()
            .owner(address)
            .exchange(exchange_id)
            .token(token_id)
            .quant(quant)
            .build(timestamp=timestamp))


def build_exchange_withdraw(address: str, exchange_id: int, token_id: str, quant: int,
                            timestamp: Optional[int] = None) -> RawTransaction:
    return (ExchangeWithdrawBuilder()
            .owner(address)
            .exchange(exchange_id)
            .token(token_id)
            .quant(quant)
            .build(timestamp=timestamp))


def build_exchange_transaction(address: str, exchange_id: int, token_id: str, quant: int,
                               expected: int, timestamp: Optional[int] = None) -> RawTransaction:
    """Trade ``quant`` of ``token_id`` against an exchange pair."""
    return (ExchangeTransactionBuilder()
            .owner(address)
            .exchange(exchange_id)
            .token(token_id)
            .quant(quant)
            .expected(expected)
            .build(timestamp=timestamp))


def build_trigger_smart_contract(address: str, contract_address: str,
                                 data: Union[bytes, str] = b"",
                                 call_value: int = 0,
                                 token_id: int = 0,
                                 call_token_value: int = 0,
                                 fee_limit: Optional[int] = None,
                                 timestamp: Optional[int] = None) -> RawTransaction:
    builder = (TriggerSmartContractBuilder()
               .owner(address)
               .contract(contract_address)
               .data(data)
               .call_value(call_value))
    if token_id or call_token_value:
        builder.call_token(token_id, call_token_value)
    return builder.build(timestamp=timestamp, fee_limit=fee_limit)


def build_account_permission_update(address: str,
                                    owner: Union[Permission, dict],
                                    actives: Iterable[Union[Permission, dict]] = (),
                                    witness: Optional[Union[Permission, dict]] = None,
                                    timestamp: Optional[int] = None) -> RawTransaction:
    builder = (AccountPermissionUpdateBuilder()
               .owner(address)
               .owner_permission(owner)
               .active_permissions(actives))
    if witness is not None:
        builder.witness_permission(witness)
    return builder.build(timestamp=timestamp)


__all__ = [
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
