"""
ECDSA (secp256k1, SHA-256) signatures over block messages.

Signatures are DER encoded and travel as hex. Signing uses a fresh random
nonce per call, so two signatures over the same message differ; both verify.
"""

from typing import Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from ..core.canonical import block_message
from ..core.encoding import hex_from_bytes
from .keys import (
    Identity,
    decode_private_key,
    decode_public_key,
    load_public_key,
    scalar_to_private_key,
)

SIGNATURE_ALGORITHM = ec.ECDSA(hashes.SHA256())


class SigningKey:
    """
    secp256k1 signing key wrapper.

    Provides:
    - Loading from an Identity
    - Signing block messages
    """

    def __init__(self, private_key: ec.EllipticCurvePrivateKey):
        self.private_key = private_key

    @classmethod
    def from_identity(cls, identity: Identity) -> "SigningKey":
        """
        Load the signing key of an identity.

        Raises:
            DecodingError: If the private key hex is malformed
            KeyPairInvalid: If the scalar is zero modulo the curve order
        """
        return cls(scalar_to_private_key(decode_private_key(identity.private_key)))

    def sign(self, message: bytes) -> bytes:
        """Sign message bytes, returning a DER signature."""
        return self.private_key.sign(message, SIGNATURE_ALGORITHM)

    def sign_hex(self, message: bytes) -> str:
        return hex_from_bytes(self.sign(message))


class VerifyingKey:
    """
    secp256k1 verifying key (public key only).
    """

    def __init__(self, public_key: ec.EllipticCurvePublicKey):
        self.public_key = public_key

    def verify(self, message: bytes, signature: bytes) -> bool:
        """
        Verify a DER signature over message.

        Returns:
            True if signature is valid, False otherwise
        """
        try:
            self.public_key.verify(signature, message, SIGNATURE_ALGORITHM)
            return True
        except (InvalidSignature, ValueError):
            return False

    def verify_hex(self, message: bytes, signature_hex: str) -> bool:
        """
        Verify a hex-encoded signature on message.

        Malformed hex counts as an invalid signature.
        """
        try:
            signature = bytes.fromhex(signature_hex)
        except (TypeError, ValueError):
            return False
        return self.verify(message, signature)


def build_signature(
    identity: Identity,
    group: str,
    key: str,
    version: int,
    data: Union[str, bytes],
) -> str:
    """
    Sign the canonical message for (group, key, version, data).

    Args:
        identity: Signing identity
        group: Block group
        key: Block key
        version: Block version
        data: Block payload

    Returns:
        Hex-encoded DER signature
    """
    message = block_message(group, key, version, data)
    return SigningKey.from_identity(identity).sign_hex(message)


def check_signature(
    public_key: str,
    group: str,
    key: str,
    version: int,
    data: Union[str, bytes],
    signature: str,
) -> bool:
    """
    Verify a signature over the canonical message for (group, key, version, data).

    A wrong key, a changed field or a malformed signature all give False.
    A public key that is not a curve point also gives False.

    Raises:
        DecodingError: If public_key is not 64 bytes of hex
    """
    decode_public_key(public_key)
    try:
        verifying_key = VerifyingKey(load_public_key(public_key))
    except ValueError:
        # well-formed hex, but not a point on the curve
        return False
    message = block_message(group, key, version, data)
    return verifying_key.verify_hex(message, signature)
