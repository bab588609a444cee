"""
Test transaction signers.

Covers the default private key signer, externally backed signers, the
bound-before-sign precondition and signature recovery.
"""

from unittest.mock import Mock

import pytest

from helpers import mk_bound_transfer, mk_private_key, mk_transfer

from linda_client.codec.hashes import transaction_id
from linda_client.codec.transaction_codec import parse_transaction, serialize_raw
from linda_client.crypto.secp256k1 import (
    Secp256k1PrivateKey, address_from_private_key, recover_address,
)
from linda_client.runtime.errors import ErrorCode, SignerError, UnboundTransactionError
from linda_client.signers import PrivateKeySigner, RemoteSigner, TransactionSigner


def test_private_key_signer_produces_envelope(private_key_hex):
    tx = mk_bound_transfer()
    raw = serialize_raw(tx)

    envelope = PrivateKeySigner().sign_transaction(tx, private_key_hex)

    assert envelope.txid == transaction_id(raw).hex()
    raw_back, signatures = parse_transaction(bytes.fromhex(envelope.hex))
    assert raw_back == raw
    assert len(signatures) == 1
    assert len(signatures[0]) == 65
    assert signatures[0][64] in (27, 28)


def test_signature_recovers_signer_address(private_key_hex):
    tx = mk_bound_transfer()
    envelope = PrivateKeySigner(private_key_hex).sign_transaction(tx)

    digest = bytes.fromhex(envelope.txid)
    assert recover_address(tx.signatures[0], digest) == address_from_private_key(private_key_hex)


def test_signing_is_deterministic(private_key_hex):
    first = PrivateKeySigner().sign_transaction(mk_bound_transfer(), private_key_hex)
    second = PrivateKeySigner().sign_transaction(mk_bound_transfer(), private_key_hex)
    assert first.hex == second.hex


def test_signing_only_appends_signature(private_key_hex):
    tx = mk_bound_transfer()
    before = tx.model_copy(deep=True)

    PrivateKeySigner().sign_transaction(tx, "0x" + private_key_hex)

    assert len(tx.signatures) == 1
    for name in ("contract", "timestamp", "expiration", "ref_block_bytes",
                 "ref_block_hash", "memo", "fee_limit"):
        assert getattr(tx, name) == getattr(before, name)


def test_unbound_transaction_rejected(private_key_hex):
    tx = mk_transfer()
    with pytest.raises(UnboundTransactionError):
        PrivateKeySigner().sign_transaction(tx, private_key_hex)
    assert tx.signatures == []


def test_partially_bound_transaction_rejected(private_key_hex):
    tx = mk_bound_transfer()
    tx.expiration = None
    with pytest.raises(UnboundTransactionError):
        PrivateKeySigner().sign_transaction(tx, private_key_hex)


def test_missing_key_rejected():
    with pytest.raises(SignerError):
        PrivateKeySigner().sign_transaction(mk_bound_transfer())


@pytest.mark.parametrize("key", ["zz", "00" * 31, "00" * 32, "ff" * 32])
def test_invalid_private_key(key):
    with pytest.raises(SignerError) as exc_info:
        PrivateKeySigner().sign_transaction(mk_bound_transfer(), key)
    assert exc_info.value.code == ErrorCode.INVALID_PRIVATE_KEY
    # key material never appears in the error
    assert key not in str(exc_info.value)


def test_private_key_signer_address_matches_derivation():
    key = mk_private_key(3)
    assert PrivateKeySigner(key).address() == Secp256k1PrivateKey.from_hex(key).to_address()
    assert str(PrivateKeySigner(key).address(prefix=0x41)).startswith("T")


def test_remote_signer_receives_txid_and_key_handle(private_key_hex):
    local = Secp256k1PrivateKey.from_hex(private_key_hex)
    backend = Mock(side_effect=lambda digest, handle: local.sign_recoverable(digest))
    tx = mk_bound_transfer()

    envelope = RemoteSigner(backend).sign_transaction(tx, "ledger://0")

    backend.assert_called_once_with(bytes.fromhex(envelope.txid), "ledger://0")
    expected = PrivateKeySigner().sign_transaction(mk_bound_transfer(), private_key_hex)
    assert envelope.hex == expected.hex


def test_remote_signer_failure_is_wrapped():
    backend = Mock(side_effect=TimeoutError("device not responding"))
    tx = mk_bound_transfer()

    with pytest.raises(SignerError) as exc_info:
        RemoteSigner(backend).sign_transaction(tx)

    assert isinstance(exc_info.value.cause, TimeoutError)
    assert tx.signatures == []


def test_remote_signer_bad_signature_length():
    backend = Mock(return_value=b"\x00" * 64)
    with pytest.raises(SignerError):
        RemoteSigner(backend).sign_transaction(mk_bound_transfer())


@pytest.mark.parametrize("returned", ["ab" * 65, None, 65, [0] * 65])
def test_remote_signer_non_bytes_signature_rejected(returned):
    backend = Mock(return_value=returned)
    tx = mk_bound_transfer()

    with pytest.raises(SignerError):
        RemoteSigner(backend).sign_transaction(tx)

    assert tx.signatures == []


def test_remote_signer_requires_callable():
    with pytest.raises(TypeError):
        RemoteSigner("not callable")


def test_custom_signer_subclass(private_key_hex):
    class CountingSigner(TransactionSigner):
        def __init__(self):
            self.calls = 0

        def sign_digest(self, digest, key_handle=None):
            self.calls += 1
            return Secp256k1PrivateKey.from_hex(private_key_hex).sign_recoverable(digest)

    signer = CountingSigner()
    signer.sign(mk_bound_transfer())
    assert signer.calls == 1
