"""
Stable fingerprints for local lookup keys.

Fingerprints never leave the client, so the algorithm only has to be stable
and well distributed: BLAKE2b with an 8-byte digest over length-framed parts.
"""

import hashlib


def fingerprint(*parts: str) -> str:
    """
    Combine string parts into a stable 64-bit fingerprint.

    Each part is framed with its byte length so ("ab", "c") and ("a", "bc")
    never collide by concatenation.

    Returns:
        Unsigned 64-bit integer as a decimal string

    Example:
        fingerprint("owner", "mygroup", "mykey") -> "1283..."
    """
    h = hashlib.blake2b(digest_size=8)
    for part in parts:
        raw = part.encode("utf-8")
        h.update(len(raw).to_bytes(8, "big"))
        h.update(raw)
    return str(int.from_bytes(h.digest(), "big"))
