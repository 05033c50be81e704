"""
Signed, versioned data blocks.

A block is addressed by (owner, group, key) and carries a version, a string
payload and an optional signature. The signature, when present, always
covers the current (group, key, version, data): any change to version or
data drops it, and only sign() sets it.
"""

import logging
from typing import Any, Dict, Optional

from ..core.canonical import VERSION_SIZE
from ..core.errors import DecodingError, IntegrityViolation, OwnerMismatch
from ..identity.keys import Identity
from ..identity.signer import build_signature, check_signature
from ..remote.store import RemoteStore

logger = logging.getLogger(__name__)

MAX_VERSION = (1 << (8 * VERSION_SIZE)) - 1


def _same_key(a: str, b: str) -> bool:
    return a.upper() == b.upper()


class SignedBlock:
    """
    Versioned, signable block.

    Fields:
        owner: Public key hex of the owning identity
        group: Group name
        key: Key name within the group
        version: Unsigned 64-bit version (starts at 0)
        data: Payload string
        signature: Hex signature, or None when unsigned
    """

    def __init__(
        self,
        owner: str,
        group: str,
        key: str,
        version: int = 0,
        data: str = "",
        signature: Optional[str] = None,
    ):
        if not 0 <= version <= MAX_VERSION:
            raise ValueError(f"version out of range: {version}")
        self._owner = owner
        self._group = group
        self._key = key
        self._version = version
        self._data = data
        self._signature = signature or None

    @classmethod
    def new(cls, owner: str, group: str, key: str) -> "SignedBlock":
        """Fresh unsigned block at version 0 with empty data."""
        return cls(owner, group, key)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "SignedBlock":
        """
        Parse block JSON without verifying it.

        Accepts "public" (wire name) or "owner" for the owner key.

        Raises:
            DecodingError: If fields are missing or mistyped
        """
        if not isinstance(raw, dict):
            raise DecodingError(f"block must be an object, got {type(raw).__name__}")
        owner = raw.get("public", raw.get("owner"))
        fields = {
            "owner": owner,
            "group": raw.get("group"),
            "key": raw.get("key"),
            "data": raw.get("data"),
        }
        for name, value in fields.items():
            if not isinstance(value, str):
                raise DecodingError(f"block field {name!r} must be a string")

        version = raw.get("version")
        if isinstance(version, bool) or not isinstance(version, int):
            raise DecodingError("block field 'version' must be an integer")
        if not 0 <= version <= MAX_VERSION:
            raise DecodingError(f"block version out of range: {version}")

        signature = raw.get("signature")
        if signature is not None and not isinstance(signature, str):
            raise DecodingError("block field 'signature' must be a string")

        return cls(
            owner=fields["owner"],
            group=fields["group"],
            key=fields["key"],
            version=version,
            data=fields["data"],
            signature=signature,
        )

    @classmethod
    def from_remote(cls, raw: Dict[str, Any]) -> "SignedBlock":
        """
        Parse and verify a block fetched from the remote store.

        Args:
            raw: Block JSON as returned by RemoteStore.get_data

        Returns:
            Verified SignedBlock

        Raises:
            DecodingError: If the JSON or the owner key is malformed
            IntegrityViolation: If the signature is absent or does not verify
        """
        block = cls.from_dict(raw)
        if not block.verify():
            raise IntegrityViolation(
                f"signature check failed for {block.group}/{block.key} "
                f"v{block.version} of {block.owner[:16]}..."
            )
        return block

    def to_dict(self) -> Dict[str, Any]:
        """Block JSON in wire field names (unsigned blocks carry an empty signature)."""
        return {
            "public": self._owner,
            "group": self._group,
            "key": self._key,
            "version": self._version,
            "data": self._data,
            "signature": self._signature or "",
        }

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def group(self) -> str:
        return self._group

    @property
    def key(self) -> str:
        return self._key

    @property
    def version(self) -> int:
        return self._version

    @property
    def data(self) -> str:
        return self._data

    @property
    def signature(self) -> Optional[str]:
        return self._signature

    def set_data(self, data: str) -> None:
        self._data = data
        self.clear_signature()

    def inc_version(self) -> None:
        if self._version >= MAX_VERSION:
            raise OverflowError("block version exhausted")
        self._version += 1
        self.clear_signature()

    def clear_signature(self) -> None:
        self._signature = None

    def is_signed(self) -> bool:
        return self._signature is not None

    def verify(self) -> bool:
        """
        Check the signature against the current fields.

        Returns:
            False when unsigned or when the signature does not verify
        """
        if self._signature is None:
            return False
        return check_signature(
            self._owner, self._group, self._key, self._version, self._data, self._signature
        )

    def _require_owner(self, identity: Identity) -> None:
        if not _same_key(identity.public_key, self._owner):
            raise OwnerMismatch(
                f"identity {identity.public_key[:16]}... does not own block "
                f"{self._group}/{self._key} of {self._owner[:16]}..."
            )

    def sign(self, identity: Identity) -> None:
        """
        Sign the current fields.

        Raises:
            OwnerMismatch: If identity is not the block owner
        """
        self._require_owner(identity)
        self._signature = build_signature(
            identity, self._group, self._key, self._version, self._data
        )

    async def save(self, remote: RemoteStore, identity: Identity) -> Any:
        """
        Bump the version, sign, and put the block to the remote store.

        The version is always incremented from the local copy, without
        reading the remote one first. A stale local copy is caught only by
        the server rejecting a non-increasing version (NetworkError).

        Args:
            remote: Remote store
            identity: Owner identity

        Returns:
            Remote store response

        Raises:
            OwnerMismatch: If identity is not the block owner (block unchanged)
            NetworkError: If the remote store rejects the put
        """
        self._require_owner(identity)
        self.inc_version()
        self.sign(identity)
        logger.debug("Saving %s/%s v%d", self._group, self._key, self._version)
        return await remote.put_data(
            self._owner, self._group, self._key, self._version, self._data, self._signature
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SignedBlock):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        state = "signed" if self.is_signed() else "unsigned"
        return (
            f"SignedBlock(owner={self._owner[:16]!r}..., group={self._group!r}, "
            f"key={self._key!r}, version={self._version}, {state})"
        )
