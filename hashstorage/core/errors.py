"""
Exception types for the hashstorage client core.
"""

from typing import Optional


class HashstorageError(Exception):
    """Base class for all hashstorage client errors."""
    pass


class IntegrityViolation(HashstorageError):
    """Raised when a loaded block fails signature verification."""
    pass


class OwnerMismatch(HashstorageError):
    """Raised when a block is signed with an identity that does not own it."""
    pass


class KeyPairInvalid(HashstorageError):
    """Raised when a loaded identity's private key does not produce its public key."""
    pass


class DecodingError(HashstorageError, ValueError):
    """Raised on malformed hex, byte or record encodings."""
    pass


class LocalStoreError(HashstorageError):
    """Raised when local key-value storage operations fail."""
    pass


class NetworkError(HashstorageError):
    """
    Non-success response (or transport failure) from the remote store.

    Fields:
        status: HTTP status code (0 when the request never got a response)
        detail: Optional detail message from the server or transport
    """

    def __init__(self, status: int, detail: Optional[str] = None):
        self.status = status
        self.detail = detail
        message = f"remote store returned status {status}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class StaleLocalVersion(UserWarning):
    """
    Warning category for blocks older than a locally observed version.

    Emitted, never raised, by the client facade. Escalate with
    ``warnings.simplefilter("error", StaleLocalVersion)`` if needed.
    """
    pass
