"""
Canonical serialization.

Two byte layouts must stay stable across clients:
- the signed block message (fixed-width header + raw data)
- canonical JSON used for local persistence
"""

import json
from typing import Any, Union

from .encoding import int_to_bytes_sized, str_to_bytes_sized

FIELD_SIZE = 32
VERSION_SIZE = 8


def data_bytes(data: Union[str, bytes]) -> bytes:
    """Block payloads are strings on the wire; signatures cover their UTF-8 bytes."""
    if isinstance(data, bytes):
        return data
    return data.encode("utf-8")


def block_message(group: str, key: str, version: int, data: Union[str, bytes]) -> bytes:
    """
    Build the message that block signatures cover.

    Layout:
    - group: 32 bytes (UTF-8, truncated or zero-padded)
    - key: 32 bytes (UTF-8, truncated or zero-padded)
    - version: 8 bytes, big-endian unsigned
    - data: raw bytes, no length prefix (always the final field)

    Args:
        group: Block group
        key: Block key
        version: Block version (unsigned 64-bit)
        data: Block payload

    Returns:
        Message bytes
    """
    return (
        str_to_bytes_sized(group, FIELD_SIZE)
        + str_to_bytes_sized(key, FIELD_SIZE)
        + int_to_bytes_sized(version, VERSION_SIZE)
        + data_bytes(data)
    )


def canonical_json_str(obj: Any) -> str:
    """
    Deterministic JSON string (sorted keys, no whitespace, UTF-8 kept).
    """
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def canonical_json_bytes(obj: Any) -> bytes:
    """Same as canonical_json_str, UTF-8 encoded."""
    return canonical_json_str(obj).encode("utf-8")
