"""
Tests for deterministic identity derivation and key-pair checks.
"""

import hashlib

import pytest

from hashstorage.core.errors import DecodingError, KeyPairInvalid
from hashstorage.identity import Identity, IdentityStore, check, derive, require_valid
from hashstorage.identity.keys import (
    CURVE_ORDER,
    decode_private_key,
    decode_public_key,
    encode_public_key,
    hash_credentials,
    point_of,
)
from hashstorage.storage import MemoryLocalStore


KNOWN_PUBLIC_KEY = (
    "F97CF0EA9BA1C36BE29045A14AAC32ED9ECD8D67A9D6823D623E161B2600ED3B"
    "4D3FA95A1580FED6068BD67013C990524DCCE132350EAC38948E3E15BC3E1E60"
)


def test_derive_matches_known_identity():
    """Keys issued to existing users must be reproduced exactly."""
    identity = derive("appidstring", "alex", "Qwerty123")

    assert identity.public_key == KNOWN_PUBLIC_KEY
    assert check(identity)


def test_public_key_hex_is_y_then_x():
    identity = derive("appidstring", "alex", "Qwerty123")
    x, y = decode_public_key(identity.public_key)

    assert identity.public_key[:64] == y.to_bytes(32, "big").hex().upper()
    assert identity.public_key[64:] == x.to_bytes(32, "big").hex().upper()
    assert point_of(decode_private_key(identity.private_key)) == (x, y)


def test_derive_is_deterministic():
    """Same credentials must reproduce the identical identity."""
    a = derive("appidstring", "alex", "Qwerty123")
    b = derive("appidstring", "alex", "Qwerty123")

    assert a == b
    assert a.public_key == b.public_key
    assert a.private_key == b.private_key


def test_derive_password_sensitivity():
    """Different passwords must give different public keys."""
    keys = {derive("appidstring", "alex", f"password-{i}").public_key for i in range(20)}
    assert len(keys) == 20


def test_derive_app_and_username_sensitivity():
    base = derive("app", "alex", "pw")
    assert derive("app2", "alex", "pw").public_key != base.public_key
    assert derive("app", "alex2", "pw").public_key != base.public_key


def test_credential_hash_is_sha256_of_colon_joined_fields():
    expected = hashlib.sha256("appidstring:alex:Qwerty123".encode("utf-8")).digest()
    assert hash_credentials("appidstring", "alex", "Qwerty123") == expected
    assert len(expected) == 32


def test_private_key_is_x_of_seed_point():
    """private_key = x(seed · G), public_key = private_key · G."""
    identity = derive("appidstring", "alex", "Qwerty123")
    seed = int.from_bytes(hash_credentials("appidstring", "alex", "Qwerty123"), "little")

    x, _ = point_of(seed)
    assert decode_private_key(identity.private_key) == x

    px, py = point_of(x)
    assert identity.public_key == encode_public_key(px, py)


def test_key_encodings_are_fixed_width_upper_hex():
    identity = derive("appidstring", "alex", "Qwerty123")

    assert len(identity.public_key) == 128
    assert len(identity.private_key) == 64
    assert identity.public_key == identity.public_key.upper()
    int(identity.public_key, 16)
    int(identity.private_key, 16)


def test_check_passes_for_derived_identities():
    for i in range(10):
        assert check(derive("app", f"user-{i}", "pw"))


def test_check_fails_for_mismatched_pair():
    a = derive("app", "alex", "pw")
    b = derive("app", "bob", "pw")

    mixed = Identity(public_key=a.public_key, private_key=b.private_key)
    assert check(mixed) is False

    with pytest.raises(KeyPairInvalid):
        require_valid(mixed)


def test_check_accepts_lower_case_hex():
    a = derive("app", "alex", "pw")
    lowered = Identity(public_key=a.public_key.lower(), private_key=a.private_key.lower())
    assert check(lowered)


def test_check_zero_private_key_is_invalid():
    a = derive("app", "alex", "pw")
    assert check(Identity(public_key=a.public_key, private_key="00" * 32)) is False
    order_hex = CURVE_ORDER.to_bytes(32, "big").hex()
    assert check(Identity(public_key=a.public_key, private_key=order_hex)) is False


@pytest.mark.parametrize(
    "public_key,private_key",
    [
        ("zz" * 64, "11" * 32),
        ("11" * 64, "zz" * 32),
        ("11" * 63, "11" * 32),
        ("11" * 64, "11" * 31),
    ],
)
def test_check_malformed_hex_raises_decoding_error(public_key, private_key):
    with pytest.raises(DecodingError):
        check(Identity(public_key=public_key, private_key=private_key))


def test_identity_repr_hides_private_key():
    a = derive("app", "alex", "pw")
    assert a.private_key not in repr(a)


def test_identity_store_roundtrip():
    store = IdentityStore(MemoryLocalStore())
    assert not store.exists()
    assert store.load() is None

    identity = derive("app", "alex", "pw")
    store.save(identity)

    assert store.exists()
    assert store.load() == identity
    assert store.local_store.get("hsPublicKey") == identity.public_key
    assert store.local_store.get("hsPrivateKey") == identity.private_key

    store.clear()
    assert not store.exists()
    assert store.load() is None


def test_identity_store_rejects_corrupted_pair():
    a = derive("app", "alex", "pw")
    b = derive("app", "bob", "pw")
    local = MemoryLocalStore({"hsPublicKey": a.public_key, "hsPrivateKey": b.private_key})

    with pytest.raises(KeyPairInvalid):
        IdentityStore(local).load()


def test_identity_store_half_written_pair_is_absent():
    a = derive("app", "alex", "pw")
    store = IdentityStore(MemoryLocalStore({"hsPublicKey": a.public_key}))

    assert not store.exists()
    assert store.load() is None
