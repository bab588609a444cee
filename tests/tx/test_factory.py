"""
Test transaction factory functions.

Each constructor must produce the requested contract variant carrying exactly
the supplied fields, leave binding and signatures empty, and reject malformed
input with InvalidArgumentError.
"""

import pytest

from helpers import FIXED_TIMESTAMP, mk_address

from linda_client.codec.transaction_codec import raw_hex, serialize_raw
from linda_client.enums import ContractType, PermissionType, ResourceCode
from linda_client.runtime.errors import InvalidArgumentError
from linda_client.transactions import (
    AccountPermissionUpdateContract, AssetIssueContract, FreezeBalanceContract,
    TransferAssetContract, TransferContract, TriggerSmartContract, VoteWitnessContract,
)
from linda_client.tx import factory
from linda_client.tx.builders import BuilderError

OWNER = mk_address(1)
OTHER = mk_address(2)
WITNESS = mk_address(3)


def assert_unbound(tx):
    assert tx.ref_block_bytes is None
    assert tx.ref_block_hash is None
    assert tx.expiration is None
    assert tx.signatures == []
    assert not tx.is_bound


def test_build_transfer_fields():
    tx = factory.build_transfer(OWNER, OTHER, 1_500_000, timestamp=FIXED_TIMESTAMP)

    assert tx.contract_type == ContractType.TRANSFER
    assert isinstance(tx.contract, TransferContract)
    assert tx.contract.owner_address == OWNER
    assert tx.contract.to_address == OTHER
    assert tx.contract.amount == 1_500_000
    assert tx.timestamp == FIXED_TIMESTAMP
    assert_unbound(tx)


def test_build_transfer_asset_fields():
    tx = factory.build_transfer_asset("1000001", OWNER, OTHER, 10)

    assert isinstance(tx.contract, TransferAssetContract)
    assert tx.contract.asset_name == "1000001"
    assert tx.contract.amount == 10
    assert_unbound(tx)


def test_build_send_dispatches_native_and_asset():
    native = factory.build_send("TRX", OWNER, OTHER, 5)
    asset = factory.build_send("LIND", OWNER, OTHER, 5)

    assert native.contract_type == ContractType.TRANSFER
    assert asset.contract_type == ContractType.TRANSFER_ASSET
    assert asset.contract.asset_name == "LIND"


def test_build_send_custom_native_token():
    tx = factory.build_send("LIND", OWNER, OTHER, 5, native_token="LIND")
    assert tx.contract_type == ContractType.TRANSFER


def test_transfer_hex_matches_unbound_serialization():
    tx = factory.build_transfer(OWNER, OTHER, 77, timestamp=FIXED_TIMESTAMP)
    preview = factory.build_transfer_hex("TRX", OWNER, OTHER, 77, timestamp=FIXED_TIMESTAMP)

    assert preview == serialize_raw(tx).hex()
    assert preview == raw_hex(tx)


def test_build_freeze_balance_resource_by_name():
    tx = factory.build_freeze_balance(OWNER, 100_000_000, 3, resource="energy", receiver=OTHER)

    assert isinstance(tx.contract, FreezeBalanceContract)
    assert tx.contract.frozen_balance == 100_000_000
    assert tx.contract.frozen_duration == 3
    assert tx.contract.resource == ResourceCode.ENERGY
    assert tx.contract.receiver_address == OTHER


def test_build_freeze_balance_defaults_to_bandwidth():
    tx = factory.build_freeze_balance(OWNER, 1, 3)
    assert tx.contract.resource == ResourceCode.BANDWIDTH
    assert tx.contract.receiver_address is None


def test_build_unfreeze_balance():
    tx = factory.build_unfreeze_balance(OWNER, ResourceCode.ENERGY)
    assert tx.contract_type == ContractType.UNFREEZE_BALANCE
    assert tx.contract.resource == ResourceCode.ENERGY


@pytest.mark.parametrize("build,expected", [
    (factory.build_unfreeze_asset, ContractType.UNFREEZE_ASSET),
    (factory.build_withdraw_balance, ContractType.WITHDRAW_BALANCE),
])
def test_owner_only_contracts(build, expected):
    tx = build(OWNER)
    assert tx.contract_type == expected
    assert tx.contract.owner_address == OWNER
    assert set(tx.contract.model_fields_set) == {"owner_address"}


def test_build_vote():
    tx = factory.build_vote(OWNER, {WITNESS: 100, OTHER: 5})

    assert isinstance(tx.contract, VoteWitnessContract)
    assert [(v.vote_address, v.vote_count) for v in tx.contract.votes] == [(WITNESS, 100), (OTHER, 5)]


def test_build_vote_requires_votes():
    with pytest.raises(InvalidArgumentError):
        factory.build_vote(OWNER, {})


@pytest.mark.parametrize("build,field,expected_type", [
    (factory.build_witness_create, "url", ContractType.WITNESS_CREATE),
    (factory.build_witness_update, "update_url", ContractType.WITNESS_UPDATE),
    (factory.build_account_update, "account_name", ContractType.ACCOUNT_UPDATE),
])
def test_owner_and_text_contracts(build, field, expected_type):
    tx = build(OWNER, "https://example.org")
    assert tx.contract_type == expected_type
    assert getattr(tx.contract, field) == "https://example.org"


def test_build_asset_participate():
    tx = factory.build_asset_participate(OWNER, OTHER, "GOLD", 250)

    assert tx.contract_type == ContractType.PARTICIPATE_ASSET_ISSUE
    assert tx.contract.to_address == OTHER
    assert tx.contract.asset_name == "GOLD"
    assert tx.contract.amount == 250


def test_build_asset_issue():
    tx = factory.build_asset_issue({
        "owner_address": OWNER,
        "name": "GOLD",
        "abbr": "GLD",
        "total_supply": 1_000_000,
        "trx_num": 1,
        "num": 10,
        "start_time": 1_700_000_000_000,
        "end_time": 1_800_000_000_000,
        "description": "gold token",
        "url": "https://gold.example",
        "frozen_supply": {30: 500},
    })

    assert isinstance(tx.contract, AssetIssueContract)
    assert tx.contract.name == "GOLD"
    assert tx.contract.frozen_supply[0].frozen_days == 30
    assert tx.contract.frozen_supply[0].frozen_amount == 500


def test_build_asset_issue_missing_required_field():
    with pytest.raises(InvalidArgumentError) as exc_info:
        factory.build_asset_issue({"owner_address": OWNER, "name": "GOLD"})
    assert "total_supply" in str(exc_info.value)


def test_build_exchange_family():
    create = factory.build_exchange_create(OWNER, "_", "1000001", 100, 200)
    inject = factory.build_exchange_inject(OWNER, 1, "_", 10)
    withdraw = factory.build_exchange_withdraw(OWNER, 1, "_", 10)
    trade = factory.build_exchange_transaction(OWNER, 1, "_", 10, 3)

    assert create.contract.first_token_balance == 100
    assert create.contract.second_token_id == "1000001"
    assert inject.contract_type == ContractType.EXCHANGE_INJECT
    assert withdraw.contract_type == ContractType.EXCHANGE_WITHDRAW
    assert trade.contract.expected == 3


def test_build_trigger_smart_contract_with_fee_limit():
    tx = factory.build_trigger_smart_contract(OWNER, OTHER, data="0xa9059cbb", fee_limit=10_000_000)

    assert isinstance(tx.contract, TriggerSmartContract)
    assert tx.contract.data == bytes.fromhex("a9059cbb")
    assert tx.fee_limit == 10_000_000


def test_build_account_permission_update():
    owner = {"type": "owner", "permission_name": "owner", "threshold": 1,
             "keys": [{"address": OWNER, "weight": 1}]}
    active = {"type": PermissionType.ACTIVE, "id": 2, "permission_name": "active",
              "threshold": 2, "operations": "7fff1fc0033e0000000000000000000000000000000000000000000000000000",
              "keys": [{"address": OWNER, "weight": 1}, {"address": OTHER, "weight": 1}]}

    tx = factory.build_account_permission_update(OWNER, owner, actives=[active])

    assert isinstance(tx.contract, AccountPermissionUpdateContract)
    assert tx.contract.owner.type == PermissionType.OWNER
    assert tx.contract.witness is None
    assert len(tx.contract.actives[0].keys) == 2


def test_variants_do_not_share_fields():
    transfer = factory.build_transfer(OWNER, OTHER, 1)
    freeze = factory.build_freeze_balance(OWNER, 1, 3)

    assert not hasattr(transfer.contract, "frozen_balance")
    assert not hasattr(freeze.contract, "to_address")


@pytest.mark.parametrize("amount", [-1, 1.5, True, "100", None, 2 ** 63])
def test_invalid_amount_rejected(amount):
    with pytest.raises(InvalidArgumentError):
        factory.build_transfer(OWNER, OTHER, amount)


@pytest.mark.parametrize("address", [
    "",
    "not-an-address",
    OWNER[:-1],
    "0x" + "11" * 20,
])
def test_invalid_address_rejected(address):
    with pytest.raises(InvalidArgumentError):
        factory.build_transfer(address, OTHER, 1)


def test_unknown_address_prefix_rejected():
    import base58
    bogus = base58.b58encode_check(b"\x00" + b"\x01" * 20).decode()
    with pytest.raises(InvalidArgumentError):
        factory.build_transfer(OWNER, bogus, 1)


@pytest.mark.parametrize("resource", ["CPU", 7, True])
def test_invalid_resource_rejected(resource):
    with pytest.raises(InvalidArgumentError):
        factory.build_freeze_balance(OWNER, 1, 3, resource=resource)


def test_builder_error_is_invalid_argument():
    with pytest.raises(BuilderError) as exc_info:
        factory.build_transfer(OWNER, OTHER, -5)

    error = exc_info.value
    assert isinstance(error, InvalidArgumentError)
    assert error.details["errors"]
    assert "amount" in error.details["errors"][0]
