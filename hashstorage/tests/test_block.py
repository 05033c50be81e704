"""
Tests for SignedBlock mutation rules, signing and remote loading.
"""

import asyncio

import pytest

from hashstorage.block import MAX_VERSION, SignedBlock
from hashstorage.core.errors import DecodingError, IntegrityViolation, NetworkError, OwnerMismatch


def signed_block(identity, data="Hello world", version=1):
    block = SignedBlock(identity.public_key, "mygroup", "mykey", version=version, data=data)
    block.sign(identity)
    return block


def test_new_block_defaults(identity):
    block = SignedBlock.new(identity.public_key, "mygroup", "mykey")

    assert block.owner == identity.public_key
    assert block.group == "mygroup"
    assert block.key == "mykey"
    assert block.version == 0
    assert block.data == ""
    assert block.signature is None
    assert not block.is_signed()


def test_sign_sets_valid_signature(identity):
    block = SignedBlock.new(identity.public_key, "mygroup", "mykey")
    block.set_data("Hello world")
    block.sign(identity)

    assert block.is_signed()
    assert block.verify()


def test_set_data_clears_signature(identity):
    block = signed_block(identity)
    block.set_data("Hi")

    assert not block.is_signed()
    assert block.data == "Hi"


def test_inc_version_clears_signature(identity):
    block = signed_block(identity)
    block.inc_version()

    assert not block.is_signed()
    assert block.version == 2


def test_inc_version_overflow(identity):
    block = SignedBlock(identity.public_key, "g", "k", version=MAX_VERSION)
    with pytest.raises(OverflowError):
        block.inc_version()


def test_version_out_of_range_rejected(identity):
    with pytest.raises(ValueError):
        SignedBlock(identity.public_key, "g", "k", version=-1)


def test_sign_with_wrong_identity_fails(identity, other_identity):
    block = SignedBlock.new(identity.public_key, "mygroup", "mykey")
    with pytest.raises(OwnerMismatch):
        block.sign(other_identity)
    assert not block.is_signed()


def test_sign_owner_comparison_ignores_hex_case(identity):
    block = SignedBlock.new(identity.public_key.lower(), "mygroup", "mykey")
    block.sign(identity)
    assert block.verify()


def test_empty_signature_means_unsigned(identity):
    block = SignedBlock(identity.public_key, "g", "k", signature="")
    assert not block.is_signed()
    assert not block.verify()


def test_from_remote_accepts_valid_block(identity):
    raw = signed_block(identity).to_dict()
    block = SignedBlock.from_remote(raw)

    assert block.is_signed()
    assert block.version == 1
    assert block.data == "Hello world"
    assert block == SignedBlock.from_dict(raw)


def test_from_remote_accepts_owner_alias(identity):
    raw = signed_block(identity).to_dict()
    raw["owner"] = raw.pop("public")

    assert SignedBlock.from_remote(raw).owner == identity.public_key


@pytest.mark.parametrize(
    "field,value",
    [("data", "tampered"), ("version", 2), ("group", "other"), ("key", "other")],
)
def test_from_remote_rejects_tampered_block(identity, field, value):
    raw = signed_block(identity).to_dict()
    raw[field] = value

    with pytest.raises(IntegrityViolation):
        SignedBlock.from_remote(raw)


def test_from_remote_rejects_foreign_owner(identity, other_identity):
    raw = signed_block(identity).to_dict()
    raw["public"] = other_identity.public_key

    with pytest.raises(IntegrityViolation):
        SignedBlock.from_remote(raw)


@pytest.mark.parametrize("signature", ["", None])
def test_from_remote_rejects_unsigned_block(identity, signature):
    raw = signed_block(identity).to_dict()
    raw["signature"] = signature

    with pytest.raises(IntegrityViolation):
        SignedBlock.from_remote(raw)


@pytest.mark.parametrize(
    "mutate",
    [
        lambda raw: raw.pop("group"),
        lambda raw: raw.update(version="1"),
        lambda raw: raw.update(version=True),
        lambda raw: raw.update(version=-1),
        lambda raw: raw.update(data=None),
        lambda raw: raw.update(signature=123),
        lambda raw: raw.update(public="not-hex"),
    ],
)
def test_from_remote_rejects_malformed_json(identity, mutate):
    raw = signed_block(identity).to_dict()
    mutate(raw)

    with pytest.raises(DecodingError):
        SignedBlock.from_remote(raw)


def test_from_remote_rejects_non_object():
    with pytest.raises(DecodingError):
        SignedBlock.from_remote(["not", "a", "block"])


def test_save_increments_signs_and_puts(identity, remote):
    block = SignedBlock.new(identity.public_key, "mygroup", "mykey")
    block.set_data("Hello world")

    asyncio.run(block.save(remote, identity))

    assert block.version == 1
    assert block.is_signed()
    assert block.verify()
    assert remote.puts == [block.to_dict()]


def test_save_always_increments_local_version(identity, remote):
    """Each save bumps the local version with no remote read."""
    block = SignedBlock.new(identity.public_key, "mygroup", "mykey")
    asyncio.run(block.save(remote, identity))
    asyncio.run(block.save(remote, identity))

    assert block.version == 2
    assert [p["version"] for p in remote.puts] == [1, 2]


def test_save_of_stale_copy_is_rejected_by_remote(identity, remote):
    first = SignedBlock.new(identity.public_key, "mygroup", "mykey")
    second = SignedBlock.new(identity.public_key, "mygroup", "mykey")
    asyncio.run(first.save(remote, identity))

    with pytest.raises(NetworkError) as exc_info:
        asyncio.run(second.save(remote, identity))

    assert exc_info.value.status == 409


def test_save_with_wrong_identity_leaves_block_unchanged(identity, other_identity, remote):
    block = SignedBlock.new(identity.public_key, "mygroup", "mykey")

    with pytest.raises(OwnerMismatch):
        asyncio.run(block.save(remote, other_identity))

    assert block.version == 0
    assert remote.puts == []


def test_repr_mentions_state(identity):
    assert "unsigned" in repr(SignedBlock.new(identity.public_key, "g", "k"))
    assert "unsigned" not in repr(signed_block(identity))
