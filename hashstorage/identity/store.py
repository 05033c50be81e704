"""
Identity persistence on top of a LocalStore.

The pair is kept under two fixed keys so other hashstorage clients sharing
the same storage see the same identity.
"""

import logging
from typing import Optional

from ..storage.store import LocalStore
from .keys import Identity, require_valid

logger = logging.getLogger(__name__)

PUBLIC_KEY_SLOT = "hsPublicKey"
PRIVATE_KEY_SLOT = "hsPrivateKey"


class IdentityStore:
    """
    Load/save/clear one identity in a LocalStore.
    """

    def __init__(self, local_store: LocalStore):
        self.local_store = local_store

    def exists(self) -> bool:
        """True if both key slots are populated."""
        return PUBLIC_KEY_SLOT in self.local_store and PRIVATE_KEY_SLOT in self.local_store

    def load(self) -> Optional[Identity]:
        """
        Load the persisted identity.

        Returns:
            Identity, or None if nothing is stored

        Raises:
            KeyPairInvalid: If the stored keys do not form a valid pair
            DecodingError: If the stored keys are malformed hex
        """
        public_key = self.local_store.get(PUBLIC_KEY_SLOT)
        private_key = self.local_store.get(PRIVATE_KEY_SLOT)
        if public_key is None or private_key is None:
            return None
        identity = require_valid(Identity(public_key=public_key, private_key=private_key))
        logger.debug("Loaded identity %s...", public_key[:16])
        return identity

    def save(self, identity: Identity) -> None:
        self.local_store.set(PUBLIC_KEY_SLOT, identity.public_key)
        self.local_store.set(PRIVATE_KEY_SLOT, identity.private_key)
        logger.info("Saved identity %s...", identity.public_key[:16])

    def clear(self) -> None:
        self.local_store.remove(PUBLIC_KEY_SLOT)
        self.local_store.remove(PRIVATE_KEY_SLOT)
        logger.info("Cleared stored identity")
