"""
Local version guard.

Remembers, per (owner, group, key), the highest block version this client
has observed or written, and flags blocks older than that. It only sees
this client's own history: writes by other clients are not detected.
"""

import logging
from typing import Optional

from ..core.errors import DecodingError
from ..core.ids import fingerprint
from ..storage.store import LocalStore
from .model import SignedBlock

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "hslsvc"


class VersionGuard:
    """
    Version records in a LocalStore under "{prefix}-{fingerprint}".

    Reads and writes are not transactional; two processes racing on the same
    block can lose an update, which only makes the guard more permissive.
    """

    def __init__(self, local_store: LocalStore, prefix: str = DEFAULT_PREFIX):
        self.local_store = local_store
        self.prefix = prefix

    @staticmethod
    def fingerprint(owner: str, group: str, key: str) -> str:
        return fingerprint(owner, group, key)

    def record_key(self, block: SignedBlock) -> str:
        return f"{self.prefix}-{self.fingerprint(block.owner, block.group, block.key)}"

    def last_known_version(self, block: SignedBlock) -> Optional[int]:
        """
        Highest version recorded for the block's address, or None.

        Raises:
            DecodingError: If the stored record is not an unsigned integer
        """
        stored = self.local_store.get(self.record_key(block))
        if stored is None:
            return None
        if not (stored.isascii() and stored.isdigit()):
            raise DecodingError(f"corrupt version record {stored!r}")
        return int(stored)

    def save_version(self, block: SignedBlock) -> None:
        self.local_store.set(self.record_key(block), str(block.version))
        logger.debug("Recorded %s/%s v%d", block.group, block.key, block.version)

    def check_version(self, block: SignedBlock) -> bool:
        """
        Check that the block is not older than what this client has seen.

        Returns:
            True if no record exists or block.version >= recorded version,
            False if the block is older
        """
        last = self.last_known_version(block)
        if last is None:
            return True
        return block.version >= last
