"""
Hex and fixed-width byte conversions.

Keys and signatures travel as hex strings. Decoding is strict about width
where the format is fixed and raises DecodingError on anything malformed.
"""

from typing import Optional

from .errors import DecodingError


def hex_to_bytes(value: str, size: Optional[int] = None) -> bytes:
    """
    Decode a hex string (either case).

    Args:
        value: Hex string
        size: Required byte length (None = any length)

    Returns:
        Decoded bytes

    Raises:
        DecodingError: If value is not valid hex or has the wrong length
    """
    if not isinstance(value, str):
        raise DecodingError(f"expected hex string, got {type(value).__name__}")
    try:
        raw = bytes.fromhex(value)
    except ValueError as ex:
        raise DecodingError(f"invalid hex string: {ex}") from ex
    if size is not None and len(raw) != size:
        raise DecodingError(f"expected {size} bytes, got {len(raw)}")
    return raw


def hex_from_bytes(raw: bytes) -> str:
    """Encode bytes as upper-case hex."""
    return raw.hex().upper()


def str_to_bytes_sized(value: str, size: int = 32) -> bytes:
    """
    Encode a string into a fixed-width field.

    UTF-8 bytes truncated to `size` when longer, zero-padded when shorter.
    """
    raw = value.encode("utf-8")[:size]
    return raw.ljust(size, b"\x00")


def int_to_bytes_sized(value: int, size: int = 8) -> bytes:
    """
    Encode a non-negative integer as fixed-width big-endian bytes.

    Raises:
        ValueError: If value does not fit in `size` bytes
    """
    if value < 0 or value >= 1 << (8 * size):
        raise ValueError(f"{value} does not fit in {size} unsigned bytes")
    return value.to_bytes(size, "big")
