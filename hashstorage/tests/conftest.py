"""Shared fixtures for hashstorage tests."""

from typing import Any, Dict, List, Tuple

import pytest

from hashstorage.core.errors import NetworkError
from hashstorage.identity import derive
from hashstorage.remote.store import RemoteStore
from hashstorage.storage import MemoryLocalStore


class FakeRemoteStore(RemoteStore):
    """
    In-memory remote store.

    Mimics the server's one rule that matters to clients: a put must carry a
    version strictly greater than the stored one.
    """

    def __init__(self) -> None:
        self.blocks: Dict[Tuple[str, str, str], Dict[str, Any]] = {}
        self.puts: List[Dict[str, Any]] = []

    async def get_version(self) -> Any:
        return {"version": "fake-1.0"}

    async def get_groups(self, owner: str) -> List[str]:
        return sorted({g for (o, g, _) in self.blocks if o == owner})

    async def get_keys(self, owner: str, group: str) -> List[str]:
        return sorted(k for (o, g, k) in self.blocks if o == owner and g == group)

    async def get_info(self, owner: str, group: str, key: str) -> Dict[str, Any]:
        block = await self.get_data(owner, group, key)
        return {"version": block["version"]}

    async def get_data(self, owner: str, group: str, key: str) -> Dict[str, Any]:
        try:
            return dict(self.blocks[(owner, group, key)])
        except KeyError:
            raise NetworkError(404, "Block not found")

    async def put_data(self, owner, group, key, version, data, signature) -> Any:
        existing = self.blocks.get((owner, group, key))
        if existing is not None and version <= existing["version"]:
            raise NetworkError(409, "Version must increase")
        record = {
            "public": owner,
            "group": group,
            "key": key,
            "version": version,
            "data": data,
            "signature": signature,
        }
        self.blocks[(owner, group, key)] = record
        self.puts.append(record)
        return {"ok": True}


@pytest.fixture(scope="session")
def identity():
    return derive("appidstring", "alex", "Qwerty123")


@pytest.fixture(scope="session")
def other_identity():
    return derive("appidstring", "bob", "Qwerty123")


@pytest.fixture
def remote():
    return FakeRemoteStore()


@pytest.fixture
def local_store():
    return MemoryLocalStore()
