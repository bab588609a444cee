"""
Test secp256k1 keys, recoverable signatures and address derivation.
"""

import pytest

from linda_client.codec.hashes import sha256_bytes
from linda_client.crypto.secp256k1 import (
    Secp256k1Error, Secp256k1PrivateKey, Secp256k1PublicKey,
    address_from_private_key, address_from_public_key, recover_address,
)
from linda_client.runtime.address import Address


@pytest.mark.parametrize("seed,account_id", [
    (1, "7e5f4552091a69125d5dfcb7b8c2659029395bdf"),
    (2, "2b5ad5c4795c026514f8317c7a215e218dccd6cf"),
])
def test_address_derivation_known_vectors(seed, account_id):
    key = seed.to_bytes(32, 'big')
    address = address_from_private_key(key)

    assert address.account_id == bytes.fromhex(account_id)
    assert str(address).startswith("L")
    assert address_from_private_key(key, prefix=0x41).account_id == bytes.fromhex(account_id)


def test_compressed_and_uncompressed_public_keys_agree():
    public = Secp256k1PrivateKey.from_hex("01" * 32).public_key()

    assert len(public.to_bytes()) == 65
    assert len(public.to_bytes(compressed=True)) == 33
    assert address_from_public_key(public.to_bytes(compressed=True)) == \
        address_from_public_key(public.to_bytes())


def test_from_hex_accepts_0x_prefix():
    a = Secp256k1PrivateKey.from_hex("0x" + "11" * 32)
    b = Secp256k1PrivateKey.from_hex("11" * 32)
    assert a.to_bytes() == b.to_bytes() == b"\x11" * 32


def test_sign_and_recover():
    key = Secp256k1PrivateKey.from_hex("22" * 32)
    digest = sha256_bytes(b"payload")

    signature = key.sign_recoverable(digest)

    assert len(signature) == 65
    assert signature[64] in (27, 28)
    assert Secp256k1PublicKey.recover(signature, digest) == key.public_key()
    # raw recovery ids are accepted too
    raw_v = signature[:64] + bytes([signature[64] - 27])
    assert recover_address(raw_v, digest) == key.to_address()


def test_digest_must_be_32_bytes():
    with pytest.raises(Secp256k1Error):
        Secp256k1PrivateKey.from_hex("22" * 32).sign_recoverable(b"short")


def test_recover_rejects_wrong_length():
    with pytest.raises(Secp256k1Error):
        Secp256k1PublicKey.recover(b"\x00" * 64, b"\x00" * 32)


def test_invalid_public_key():
    with pytest.raises(Secp256k1Error):
        Secp256k1PublicKey(b"\x05" * 33)


def test_random_key_and_repr_hides_secret():
    key = Secp256k1PrivateKey()
    assert len(key.to_bytes()) == 32
    assert key.to_bytes().hex() not in repr(key)
    assert isinstance(key.to_address(), Address)
