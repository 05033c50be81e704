"""
Identities: deterministic key pairs and block signatures.

Provides:
- Identity model and deterministic derivation from credentials
- Key-pair consistency check
- ECDSA signing and verification over block messages
- IdentityStore persistence
"""

from .keys import Identity, derive, check, require_valid
from .signer import SigningKey, VerifyingKey, build_signature, check_signature
from .store import IdentityStore, PUBLIC_KEY_SLOT, PRIVATE_KEY_SLOT

__all__ = [
    "Identity",
    "derive",
    "check",
    "require_valid",
    "SigningKey",
    "VerifyingKey",
    "build_signature",
    "check_signature",
    "IdentityStore",
    "PUBLIC_KEY_SLOT",
    "PRIVATE_KEY_SLOT",
]
