"""HS512 signing-key derivation shared by settings validation and the token service."""

import base64
import binascii

from flyak.constants import JWT_ALGORITHM, JWT_MIN_KEY_BYTES


class SigningKeyError(ValueError):
    """The configured secret cannot be used as an HS512 key."""


def derive_signing_key(secret: str) -> bytes:
    """Decode the base64 *secret* into HS512 key bytes.

    Raises:
        SigningKeyError: If *secret* is not valid base64 or is too short.
    """
    try:
        key = base64.b64decode(secret, validate=True)
    except (binascii.Error, TypeError, ValueError) as exc:
        raise SigningKeyError("JWT secret is not valid base64") from exc
    if len(key) < JWT_MIN_KEY_BYTES:
        raise SigningKeyError(
            f"JWT secret decodes to {len(key) * 8} bits; "
            f"{JWT_ALGORITHM} requires at least {JWT_MIN_KEY_BYTES * 8}"
        )
    return key
