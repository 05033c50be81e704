"""
Blocks and local version tracking.

Provides:
- SignedBlock: versioned payload with signature invalidation rules
- VersionGuard: local highest-seen-version records
"""

from .model import SignedBlock, MAX_VERSION
from .version_guard import VersionGuard, DEFAULT_PREFIX

__all__ = [
    "SignedBlock",
    "MAX_VERSION",
    "VersionGuard",
    "DEFAULT_PREFIX",
]
