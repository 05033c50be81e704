"""
Hashstorage client core

Deterministic identities, signed versioned blocks and a local version guard
for the hashstorage versioned key-value service.
"""

__version__ = "0.1.0"
