"""
LocalStore abstract interface.

A string-keyed, string-valued persistent store standing in for browser
local storage. Identities and version records live here.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterator, Optional


class LocalStore(ABC):
    """
    Abstract local key-value storage interface.

    All implementations must guarantee:
    - get() returns None for missing keys (never raises KeyError)
    - set() overwrites existing values
    - remove() of a missing key is a no-op
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read a value.

        Args:
            key: Record key

        Returns:
            Stored string, or None if absent

        Raises:
            LocalStoreError: If the backend cannot be read
        """
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Write a value, replacing any previous one.

        Raises:
            LocalStoreError: If the backend cannot be written
        """
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        """
        Delete a value if present.

        Raises:
            LocalStoreError: If the backend cannot be written
        """
        ...

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


class MemoryLocalStore(LocalStore):
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> Iterator[str]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)
