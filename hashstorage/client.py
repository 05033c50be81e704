"""
Client facade tying identity, blocks, remote store and version guard together.

Typical flow:

    client = HashstorageClient(remote, identity, local_store)
    result = await client.load_block("notes", "todo")
    result.block.set_data("buy milk")
    await client.save_block(result.block)
"""

import warnings
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .block.model import SignedBlock
from .block.version_guard import DEFAULT_PREFIX, VersionGuard
from .core.errors import DecodingError, IntegrityViolation, StaleLocalVersion
from .identity.keys import Identity
from .logging_config import get_logger
from .remote.store import RemoteStore
from .storage.store import LocalStore, MemoryLocalStore


@dataclass(frozen=True)
class LoadResult:
    """
    Result of loading a block.

    When up_to_date is False the block is older than a version this client
    has already seen or written; saving it would be based on stale data.
    """

    block: SignedBlock
    up_to_date: bool


class HashstorageClient:
    """
    Owner-scoped access to a remote store.
    """

    def __init__(
        self,
        remote: RemoteStore,
        identity: Identity,
        local_store: Optional[LocalStore] = None,
        version_prefix: str = DEFAULT_PREFIX,
    ):
        self.remote = remote
        self.identity = identity
        self.guard = VersionGuard(local_store or MemoryLocalStore(), version_prefix)

    @property
    def owner(self) -> str:
        return self.identity.public_key

    def _logger(self, owner: str, group: str, key: str):
        return get_logger(__name__, trace_id=self.guard.fingerprint(owner, group, key))

    async def remote_version(self) -> Any:
        return await self.remote.get_version()

    async def list_groups(self) -> List[str]:
        return await self.remote.get_groups(self.owner)

    async def list_keys(self, group: str) -> List[str]:
        return await self.remote.get_keys(self.owner, group)

    async def get_info(self, group: str, key: str, owner: Optional[str] = None) -> Dict[str, Any]:
        return await self.remote.get_info(owner or self.owner, group, key)

    async def fetch_block_json(self, group: str, key: str, owner: Optional[str] = None) -> Dict[str, Any]:
        """Raw, unverified block JSON."""
        return await self.remote.get_data(owner or self.owner, group, key)

    def new_block(self, group: str, key: str) -> SignedBlock:
        return SignedBlock.new(self.owner, group, key)

    async def load_block(self, group: str, key: str, owner: Optional[str] = None) -> LoadResult:
        """
        Fetch, verify and version-check a block.

        Up-to-date blocks have their version recorded. Stale blocks emit a
        StaleLocalVersion warning and leave the record untouched.

        Args:
            group: Block group
            key: Block key
            owner: Owner public key (default: this client's identity)

        Raises:
            IntegrityViolation: If the block signature does not verify
            DecodingError: If the block JSON is malformed
            NetworkError: If the remote store fails
        """
        owner = owner or self.owner
        log = self._logger(owner, group, key)
        raw = await self.remote.get_data(owner, group, key)
        try:
            block = SignedBlock.from_remote(raw)
        except (IntegrityViolation, DecodingError):
            log.error("Rejected block %s/%s", group, key)
            raise

        up_to_date = self.guard.check_version(block)
        if up_to_date:
            self.guard.save_version(block)
            log.info("Loaded %s/%s v%d", group, key, block.version)
        else:
            last = self.guard.last_known_version(block)
            log.warning("Loaded stale %s/%s v%d (seen v%s)", group, key, block.version, last)
            warnings.warn(
                f"{group}/{key} v{block.version} is older than locally seen v{last}",
                StaleLocalVersion,
                stacklevel=2,
            )
        return LoadResult(block=block, up_to_date=up_to_date)

    async def save_block(self, block: SignedBlock) -> Any:
        """
        Save a block (version bump + sign + put) and record the new version.

        Raises:
            OwnerMismatch: If this identity does not own the block
            NetworkError: If the remote store rejects the put
        """
        response = await block.save(self.remote, self.identity)
        self.guard.save_version(block)
        self._logger(block.owner, block.group, block.key).info(
            "Saved %s/%s v%d", block.group, block.key, block.version
        )
        return response
