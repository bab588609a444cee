"""
Test reference block binding.

Covers the byte-level binding algorithm, idempotence, overwrite,
expiration arithmetic and failure handling.
"""

import pytest

from helpers import EXAMPLE_BLOCK_HASH, MockGateway, mk_block, mk_transfer

from linda_client.codec.bytecodec import long_to_byte_array
from linda_client.runtime.errors import NetworkError, StaleReferenceError
from linda_client.transactions import BlockReference
from linda_client.tx.reference import EXPIRATION_WINDOW_MS, bind, bind_latest, compute_reference


def test_example_block_binding():
    """Block 100 with the documented hash yields the documented bytes."""
    block = BlockReference(number=100, hash=EXAMPLE_BLOCK_HASH, timestamp_ms=1_000)

    num_bytes = long_to_byte_array(100)[::-1]
    assert list(num_bytes) == [0, 0, 0, 0, 0, 0, 0, 100]

    hash_bytes = bytes.fromhex(EXAMPLE_BLOCK_HASH)
    block_id = num_bytes[:8] + hash_bytes[8:len(hash_bytes) - 1]

    tx = bind(mk_transfer(), block)

    assert list(tx.ref_block_bytes) == [0, 100]
    assert tx.ref_block_hash == block_id[8:16]
    assert len(tx.ref_block_hash) == 8
    assert tx.expiration == 1_000 + 300_000


def test_ref_block_hash_comes_from_hash_bytes_8_to_16():
    block = BlockReference(number=7, hash=bytes(range(32)).hex(), timestamp_ms=0)
    ref_block_bytes, ref_block_hash, _ = compute_reference(block)

    assert ref_block_hash == bytes(range(8, 16))
    assert ref_block_bytes == b"\x00\x07"


def test_ref_block_bytes_are_low_two_bytes_big_endian():
    block = mk_block(number=0x0102_0304_0506)
    ref_block_bytes, _, _ = compute_reference(block)
    assert ref_block_bytes == b"\x05\x06"


@pytest.mark.parametrize("timestamp", [0, 1, 1_600_000_000_000, 2 ** 62])
def test_expiration_is_timestamp_plus_window(timestamp):
    tx = bind(mk_transfer(), mk_block(timestamp=timestamp))
    assert tx.expiration == timestamp + EXPIRATION_WINDOW_MS
    assert EXPIRATION_WINDOW_MS == 300_000


def test_bind_mutates_and_returns_same_instance():
    tx = mk_transfer()
    assert not tx.is_bound

    result = bind(tx, mk_block())

    assert result is tx
    assert tx.is_bound


def test_bind_is_idempotent():
    block = mk_block(number=12345)
    tx = mk_transfer()

    bind(tx, block)
    first = (tx.ref_block_bytes, tx.ref_block_hash, tx.expiration)
    bind(tx, block)
    second = (tx.ref_block_bytes, tx.ref_block_hash, tx.expiration)

    assert first == second


def test_rebind_overwrites_previous_reference():
    block_a = mk_block(number=111, timestamp=5_000)
    block_b = mk_block(number=222, block_hash="ff" * 32, timestamp=9_000)

    tx = bind(bind(mk_transfer(), block_a), block_b)
    fresh = bind(mk_transfer(), block_b)

    assert tx.ref_block_bytes == fresh.ref_block_bytes
    assert tx.ref_block_hash == fresh.ref_block_hash == b"\xff" * 8
    assert tx.expiration == fresh.expiration == 9_000 + EXPIRATION_WINDOW_MS


def test_bind_does_not_touch_other_fields():
    tx = mk_transfer(amount=42)
    contract, timestamp = tx.contract, tx.timestamp

    bind(tx, mk_block())

    assert tx.contract is contract
    assert tx.timestamp == timestamp
    assert tx.signatures == []
    assert tx.memo is None


def test_bind_accepts_block_payload_dict():
    tx = bind(mk_transfer(), {"number": 100, "hash": EXAMPLE_BLOCK_HASH, "timestamp": 10})
    assert tx.ref_block_bytes == b"\x00\x64"
    assert tx.expiration == 10 + EXPIRATION_WINDOW_MS


def test_bind_without_reference_raises_stale():
    with pytest.raises(StaleReferenceError):
        bind(mk_transfer(), None)


@pytest.mark.parametrize("bad_hash", ["not-hex", "abc", "00" * 16, ""])
def test_bind_with_unusable_hash_raises_stale(bad_hash):
    block = BlockReference(number=1, hash=bad_hash, timestamp_ms=0)
    with pytest.raises(StaleReferenceError):
        bind(mk_transfer(), block)


def test_failed_bind_leaves_transaction_untouched():
    tx = bind(mk_transfer(), mk_block(number=500))
    before = (tx.ref_block_bytes, tx.ref_block_hash, tx.expiration)

    with pytest.raises(StaleReferenceError):
        bind(tx, BlockReference(number=501, hash="zz", timestamp_ms=0))

    assert (tx.ref_block_bytes, tx.ref_block_hash, tx.expiration) == before


def test_malformed_block_payload_raises_stale():
    with pytest.raises(StaleReferenceError):
        bind(mk_transfer(), {"number": -1, "hash": EXAMPLE_BLOCK_HASH, "timestamp": 0})


def test_bind_latest_uses_gateway_block():
    gateway = MockGateway(mk_block(number=100, block_hash=EXAMPLE_BLOCK_HASH, timestamp=50))

    tx = bind_latest(mk_transfer(), gateway)

    assert gateway.fetch_calls == 1
    assert tx.ref_block_bytes == b"\x00\x64"
    assert tx.expiration == 50 + EXPIRATION_WINDOW_MS


def test_bind_latest_wraps_gateway_failure():
    gateway = MockGateway()
    gateway.fetch_error = NetworkError("connection refused")
    tx = mk_transfer()

    with pytest.raises(StaleReferenceError) as exc_info:
        bind_latest(tx, gateway)

    assert isinstance(exc_info.value.cause, NetworkError)
    assert not tx.is_bound
    # no retry at this layer
    assert gateway.fetch_calls == 1


@pytest.mark.parametrize("error", [
    TimeoutError("fetch timed out"),
    ConnectionError("connection reset"),
    RuntimeError("gateway bug"),
])
def test_bind_latest_wraps_foreign_gateway_errors(error):
    gateway = MockGateway()
    gateway.fetch_error = error
    tx = mk_transfer()

    with pytest.raises(StaleReferenceError) as exc_info:
        bind_latest(tx, gateway)

    assert exc_info.value.cause is error
    assert not tx.is_bound


def test_bind_latest_rejects_non_block_result():
    gateway = MockGateway()
    gateway.block = "not a block"
    tx = mk_transfer()

    with pytest.raises(StaleReferenceError):
        bind_latest(tx, gateway)
    assert not tx.is_bound


def test_sixteen_byte_hash_is_rejected():
    block = mk_block(block_hash="00" * 16)
    with pytest.raises(StaleReferenceError):
        compute_reference(block)
    # one more byte is enough for a full 8-byte ref_block_hash
    assert len(compute_reference(mk_block(block_hash="00" * 17))[1]) == 8
