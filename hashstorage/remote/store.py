"""
RemoteStore abstract interface.

Async contract for the hashstorage service. Every call is a suspension
point; failures surface as NetworkError with no retry at this layer.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class RemoteStore(ABC):
    """
    Abstract remote block storage interface.

    Implementations must:
    - Raise NetworkError(status, detail) for non-success responses
    - Leave version monotonicity to the server (no client-side reconciliation)
    """

    @abstractmethod
    async def get_version(self) -> Any:
        """Backend version and health check."""
        ...

    @abstractmethod
    async def get_groups(self, owner: str) -> List[str]:
        """List groups under an owner."""
        ...

    @abstractmethod
    async def get_keys(self, owner: str, group: str) -> List[str]:
        """List keys under an owner's group."""
        ...

    @abstractmethod
    async def get_info(self, owner: str, group: str, key: str) -> Dict[str, Any]:
        """Metadata for a block."""
        ...

    @abstractmethod
    async def get_data(self, owner: str, group: str, key: str) -> Dict[str, Any]:
        """
        Fetch the current block.

        Returns:
            Raw block JSON: public, group, key, version, data, signature
        """
        ...

    @abstractmethod
    async def put_data(
        self,
        owner: str,
        group: str,
        key: str,
        version: int,
        data: str,
        signature: str,
    ) -> Any:
        """
        Create or update a block.

        The server rejects versions not strictly greater than its own.
        """
        ...


def put_body(version: int, data: str, signature: str) -> Dict[str, Any]:
    """Wire payload for put_data."""
    return {"version": version, "data": data, "signature": signature}
