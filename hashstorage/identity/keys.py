"""
Deterministic secp256k1 identities.

An identity is derived from (app_id, username, password) with no stored
secret on the server side:

    seed        = SHA-256(app_id ":" username ":" password), read little-endian
    private_key = x(seed · G)
    public_key  = private_key · G

The x-coordinate of seed · G is a field element and is kept as-is as the
private scalar. Scalar multiplication is taken mod the group order n, which
leaves every point unchanged.

Key hex is big-endian per number; public keys put y before x. Both layouts
match the keys issued by existing hashstorage clients.
"""

import hashlib
from dataclasses import dataclass
from typing import Tuple

from cryptography.hazmat.primitives.asymmetric import ec

from ..core.encoding import hex_from_bytes, hex_to_bytes
from ..core.errors import KeyPairInvalid

CURVE = ec.SECP256K1()
CURVE_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

PRIVATE_KEY_SIZE = 32
PUBLIC_KEY_SIZE = 64


@dataclass(frozen=True)
class Identity:
    """
    Key pair identifying a hashstorage user.

    Fields:
        public_key: Hex of y‖x (64 bytes, upper-case)
        private_key: Hex of the private scalar (32 bytes, upper-case)
    """
    public_key: str
    private_key: str

    def __repr__(self) -> str:
        return f"Identity(public_key={self.public_key!r})"


def hash_credentials(app_id: str, username: str, password: str) -> bytes:
    """SHA-256 over app_id ":" username ":" password (32 bytes)."""
    h = hashlib.sha256()
    h.update(app_id.encode("utf-8"))
    h.update(b":")
    h.update(username.encode("utf-8"))
    h.update(b":")
    h.update(password.encode("utf-8"))
    return h.digest()


def scalar_to_private_key(scalar: int) -> ec.EllipticCurvePrivateKey:
    """
    Build a private key object for scalar · G.

    Raises:
        KeyPairInvalid: If the scalar is a multiple of the group order
    """
    reduced = scalar % CURVE_ORDER
    if reduced == 0:
        raise KeyPairInvalid("scalar is zero modulo the curve order")
    return ec.derive_private_key(reduced, CURVE)


def point_of(scalar: int) -> Tuple[int, int]:
    """Affine coordinates of scalar · G."""
    numbers = scalar_to_private_key(scalar).public_key().public_numbers()
    return numbers.x, numbers.y


def encode_public_key(x: int, y: int) -> str:
    return hex_from_bytes(y.to_bytes(32, "big") + x.to_bytes(32, "big"))


def encode_private_key(scalar: int) -> str:
    return hex_from_bytes(scalar.to_bytes(PRIVATE_KEY_SIZE, "big"))


def decode_private_key(private_key: str) -> int:
    """
    Decode private key hex to its scalar.

    Raises:
        DecodingError: If the hex is malformed or not 32 bytes
    """
    return int.from_bytes(hex_to_bytes(private_key, PRIVATE_KEY_SIZE), "big")


def decode_public_key(public_key: str) -> Tuple[int, int]:
    """
    Decode public key hex (y‖x) to affine coordinates (x, y).

    Raises:
        DecodingError: If the hex is malformed or not 64 bytes
    """
    raw = hex_to_bytes(public_key, PUBLIC_KEY_SIZE)
    return int.from_bytes(raw[32:], "big"), int.from_bytes(raw[:32], "big")


def load_public_key(public_key: str) -> ec.EllipticCurvePublicKey:
    """
    Build a verifying key object from public key hex.

    Raises:
        DecodingError: If the hex is malformed
        ValueError: If the coordinates are not a point on the curve
    """
    x, y = decode_public_key(public_key)
    return ec.EllipticCurvePublicNumbers(x, y, CURVE).public_key()


def derive(app_id: str, username: str, password: str) -> Identity:
    """
    Derive the identity for a set of credentials.

    Identical credentials always give the identical identity.

    Args:
        app_id: Application identifier (namespaces identities per app)
        username: User name
        password: Password

    Returns:
        Identity
    """
    seed = int.from_bytes(hash_credentials(app_id, username, password), "little")
    private_scalar, _ = point_of(seed)
    x, y = point_of(private_scalar)
    return Identity(
        public_key=encode_public_key(x, y),
        private_key=encode_private_key(private_scalar),
    )


def check(identity: Identity) -> bool:
    """
    Check that private_key · G == public_key.

    Use on identities loaded from storage that may be corrupted.

    Returns:
        True if the pair is consistent, False otherwise

    Raises:
        DecodingError: If either key is malformed hex
    """
    private_scalar = decode_private_key(identity.private_key)
    expected = decode_public_key(identity.public_key)
    try:
        actual = point_of(private_scalar)
    except KeyPairInvalid:
        return False
    return actual == expected


def require_valid(identity: Identity) -> Identity:
    """
    Return identity unchanged if check() passes.

    Raises:
        KeyPairInvalid: If the key pair is inconsistent
    """
    if not check(identity):
        raise KeyPairInvalid(
            f"private key does not match public key {identity.public_key[:16]}..."
        )
    return identity
