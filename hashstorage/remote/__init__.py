"""
Remote block storage.

This module provides:
- RemoteStore: Abstract async interface to the hashstorage service
- HttpRemoteStore: httpx-based HTTP/JSON implementation
"""

from .store import RemoteStore, put_body
from .http_store import HttpRemoteStore

__all__ = [
    "RemoteStore",
    "put_body",
    "HttpRemoteStore",
]
