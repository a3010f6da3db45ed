"""JWT token issuance and validation.

Tokens are HS512-signed JWS strings carrying the principal's id as ``sub``
plus ``name`` and ``roles``. Issuer and audience are fixed (see
``flyak.constants``) and enforced on every parse, along with the signature
and expiry.

Signing key
~~~~~~~~~~~
The configured secret is base64. It is decoded into key bytes the first
time a token is issued or parsed, and the result is kept for the life of
the ``TokenService`` instance. Derivation runs under a lock so concurrent
first callers all end up with the same key. A secret that is not valid
base64, or that decodes to fewer than 64 bytes, raises ``SigningKeyError``
on first use; nothing is cached in that case.

Token revocation
~~~~~~~~~~~~~~~~
Validation is stateless. A token stays valid until ``exp``; rotating the
secret is the only way to invalidate tokens early.
"""

import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import Any, Protocol

from jose import jwt
from jose.exceptions import (
    ExpiredSignatureError,
    JWSSignatureError,
    JWTClaimsError,
    JWTError,
)

from flyak.auth.keys import SigningKeyError, derive_signing_key
from flyak.auth.principal import Authentication
from flyak.config import Settings
from flyak.constants import (
    JWT_ALGORITHM,
    JWT_AUDIENCE,
    JWT_ISSUER,
    JWT_REQUIRED_CLAIMS,
)
from flyak.utils.logging import get_logger

logger = get_logger(__name__)


class UnsupportedTokenError(JWTError):
    """The token was signed with an algorithm other than HS512."""


class TokenFailure(StrEnum):
    """Why a token was rejected."""

    BAD_SIGNATURE = "bad_signature"
    MALFORMED = "malformed"
    EXPIRED = "expired"
    UNSUPPORTED = "unsupported"
    INVALID_ARGUMENT = "invalid_argument"


@dataclass(frozen=True)
class TokenCheck:
    """Outcome of parsing a token. ``failure`` is set only when ``ok`` is false."""

    ok: bool
    failure: TokenFailure | None = None
    detail: str = ""
    error: BaseException | None = field(default=None, compare=False, repr=False)


class PrincipalLike(Protocol):
    id: int
    name: str
    roles: Sequence[str]


def _caused_by(exc: BaseException, kind: type[BaseException]) -> bool:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, kind):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False


def classify_error(exc: JWTError) -> TokenFailure:
    """Map a python-jose error to the failure kind it represents."""
    if isinstance(exc, ExpiredSignatureError):
        return TokenFailure.EXPIRED
    if isinstance(exc, UnsupportedTokenError):
        return TokenFailure.UNSUPPORTED
    if isinstance(exc, JWTClaimsError):
        return TokenFailure.INVALID_ARGUMENT
    # jose re-wraps the signature error as a generic JWSError, then JWTError
    if _caused_by(exc, JWSSignatureError) or "Signature verification failed" in str(exc):
        return TokenFailure.BAD_SIGNATURE
    return TokenFailure.MALFORMED


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """Issues and verifies HS512 JWTs for a principal."""

    def __init__(
        self,
        secret: str,
        lifetime_minutes: int | str,
        *,
        clock: Callable[[], datetime] | None = None,
    ):
        minutes = int(lifetime_minutes)
        if minutes <= 0:
            raise ValueError(f"Token lifetime must be a positive number of minutes, got {minutes}")
        self._secret = secret
        self._lifetime = timedelta(minutes=minutes)
        self._clock = clock or _utcnow
        self._key: bytes | None = None
        self._key_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(settings.jwt_secret, settings.jwt_lifetime_minutes)

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    @property
    def signing_key(self) -> bytes:
        """The HS512 key, derived on first access and then reused."""
        if self._key is None:
            with self._key_lock:
                if self._key is None:
                    self._key = derive_signing_key(self._secret)
        return self._key

    # ------------------------------------------------------------------
    # Issuance
    # ------------------------------------------------------------------

    def generate_token(self, principal: PrincipalLike) -> str:
        """Create a signed token for *principal*."""
        return self._encode(principal.id, principal)

    def generate_token_for_authentication(self, authentication: Authentication) -> str:
        """Create a signed token for the user behind a completed authentication."""
        details = authentication.principal
        return self._encode(details.id, details.user)

    def _encode(self, subject_id: int, principal: PrincipalLike) -> str:
        if subject_id is None:
            raise ValueError("principal has no id; persist it before issuing a token")
        issued_at = self._clock()
        claims: dict[str, Any] = {
            "sub": str(int(subject_id)),
            "name": principal.name,
            "roles": list(principal.roles or []),
            "iat": issued_at,
            "exp": issued_at + self._lifetime,
            "iss": JWT_ISSUER,
            "aud": JWT_AUDIENCE,
        }
        return jwt.encode(claims, self.signing_key, algorithm=JWT_ALGORITHM)

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def decode(self, token: str) -> dict[str, Any]:
        """Verify *token* and return its claims.

        Enforces the signature, algorithm, issuer, audience, expiry and the
        presence of every required claim.

        Raises:
            JWTError: On any parse or validation failure.
            SigningKeyError: If the configured secret is unusable.
        """
        key = self.signing_key
        header = jwt.get_unverified_header(token)
        if header.get("alg") != JWT_ALGORITHM:
            raise UnsupportedTokenError(f"Unsupported token algorithm: {header.get('alg')!r}")

        claims = jwt.decode(
            token,
            key,
            algorithms=[JWT_ALGORITHM],
            audience=JWT_AUDIENCE,
            issuer=JWT_ISSUER,
        )
        missing = JWT_REQUIRED_CLAIMS - claims.keys()
        if missing:
            raise JWTClaimsError(f"Missing required claims: {', '.join(sorted(missing))}")
        return claims

    def get_subject(self, token: str) -> str:
        """Return the ``sub`` claim of a verified token. Raises JWTError on failure."""
        return self.decode(token)["sub"]

    def check(self, token: Any) -> TokenCheck:
        """Parse *token* and report the outcome without raising."""
        if not isinstance(token, str) or not token.strip():
            return TokenCheck(
                ok=False,
                failure=TokenFailure.INVALID_ARGUMENT,
                detail="token is empty or not a string",
            )
        try:
            self.decode(token)
        except SigningKeyError:
            raise
        except JWTError as exc:
            return TokenCheck(ok=False, failure=classify_error(exc), detail=str(exc), error=exc)
        except (TypeError, ValueError) as exc:
            # claims of the wrong JSON type slip past jose's own checks
            return TokenCheck(
                ok=False, failure=TokenFailure.MALFORMED, detail=str(exc), error=exc
            )
        return TokenCheck(ok=True)

    def validate(self, token: Any) -> bool:
        """Return ``True`` if *token* is currently valid. Logs the reason otherwise."""
        result = self.check(token)
        if result.ok:
            return True

        if result.failure is TokenFailure.EXPIRED:
            logger.info("token_rejected", reason=result.failure.value)
        elif result.failure is TokenFailure.UNSUPPORTED:
            logger.error(
                "token_rejected",
                reason=result.failure.value,
                error=result.detail,
                exc_info=result.error,
            )
        else:
            logger.error("token_rejected", reason=result.failure.value, error=result.detail)
        return False
