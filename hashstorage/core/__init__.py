"""
Core primitives shared by identities, blocks and stores.

- Errors: the client's exception taxonomy
- Encoding: hex and fixed-width conversions
- Canonical: the signed block message and canonical JSON
- IDs: stable local fingerprints
"""

from .errors import (
    HashstorageError,
    IntegrityViolation,
    OwnerMismatch,
    KeyPairInvalid,
    DecodingError,
    LocalStoreError,
    NetworkError,
    StaleLocalVersion,
)
from .encoding import hex_to_bytes, hex_from_bytes, str_to_bytes_sized, int_to_bytes_sized
from .canonical import block_message, canonical_json_str, canonical_json_bytes
from .ids import fingerprint

__all__ = [
    "HashstorageError",
    "IntegrityViolation",
    "OwnerMismatch",
    "KeyPairInvalid",
    "DecodingError",
    "LocalStoreError",
    "NetworkError",
    "StaleLocalVersion",
    "hex_to_bytes",
    "hex_from_bytes",
    "str_to_bytes_sized",
    "int_to_bytes_sized",
    "block_message",
    "canonical_json_str",
    "canonical_json_bytes",
    "fingerprint",
]
