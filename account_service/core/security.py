"""Password hashing and JWT creation/verification for authentication."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from account_service.core.config import Settings
from account_service.schemas.account import Role

# bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72


class HashingError(Exception):
    """Raised when bcrypt cannot hash, or a stored hash is malformed."""


class TokenError(Exception):
    """Base class for session token verification failures."""


class TokenInvalidError(TokenError):
    """Bad signature, unparseable token, or malformed payload."""


class TokenExpiredError(TokenError):
    """Token signature is valid but its expiry has passed."""


def _encode_password(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """Salted bcrypt hashing with a configurable work factor."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    @classmethod
    def from_settings(cls, cfg: Settings) -> "PasswordHasher":
        return cls(rounds=cfg.BCRYPT_ROUNDS)

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Every call uses a fresh salt."""
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            return bcrypt.hashpw(_encode_password(plain_password), salt).decode("utf-8")
        except (ValueError, TypeError) as e:
            raise HashingError("Password hashing failed") from e

    def verify(self, plain_password: str, hashed: str) -> bool:
        """
        Verify a plain password against a stored hash.

        Returns False on mismatch. Raises HashingError only if `hashed` is not a
        usable bcrypt hash.
        """
        try:
            return bcrypt.checkpw(_encode_password(plain_password), hashed.encode("utf-8"))
        except (ValueError, TypeError, AttributeError) as e:
            raise HashingError("Stored password hash is malformed") from e


@dataclass(frozen=True)
class TokenClaims:
    """Identity asserted by a verified session token."""

    account_id: str
    role: Role


class TokenIssuer:
    """Issues and verifies signed, time-bounded session tokens (JWT)."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        default_ttl: timedelta = timedelta(minutes=60),
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._secret = secret
        self.algorithm = algorithm
        self.default_ttl = default_ttl
        self._clock = clock or (lambda: datetime.now(UTC))

    @classmethod
    def from_settings(cls, cfg: Settings) -> "TokenIssuer":
        return cls(
            secret=cfg.JWT_SECRET.get_secret_value(),
            algorithm=cfg.JWT_ALGORITHM,
            default_ttl=timedelta(minutes=cfg.JWT_EXPIRE_MINUTES),
        )

    def issue(self, account_id: str, role: Role | str, ttl: timedelta | None = None) -> str:
        """Create a JWT with sub (account id), role, iat and exp."""
        now = self._clock()
        expire = now + (ttl if ttl is not None else self.default_ttl)
        payload: dict[str, Any] = {
            "sub": str(account_id),
            "role": Role(role).value,
            "iat": now,
            "exp": expire,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a JWT; return the asserted account id and role.

        Raises TokenExpiredError once exp has passed, TokenInvalidError for any
        other signature or payload problem.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "role", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.PyJWTError as e:
            raise TokenInvalidError(str(e)) from e

        sub = payload.get("sub")
        if not isinstance(sub, str) or not sub:
            raise TokenInvalidError("Token subject is missing")
        try:
            role = Role(payload.get("role"))
        except ValueError as e:
            raise TokenInvalidError("Token role is not recognised") from e
        return TokenClaims(account_id=sub, role=role)
