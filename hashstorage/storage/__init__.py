"""
Local key-value storage.

This module provides:
- LocalStore: Abstract string key-value interface
- MemoryLocalStore: In-memory dict storage
- FileLocalStore: Single JSON document on disk

S3LocalStore lives in hashstorage.storage.s3_store (requires the s3 extra).
"""

from .store import LocalStore, MemoryLocalStore
from .file_store import FileLocalStore

__all__ = [
    "LocalStore",
    "MemoryLocalStore",
    "FileLocalStore",
]
