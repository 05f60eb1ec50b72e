"""Unit tests for account_service.core.security: bcrypt hashing and JWT session tokens."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import jwt

from account_service.core.config import Settings
from account_service.core.security import (
    HashingError,
    PasswordHasher,
    TokenClaims,
    TokenError,
    TokenExpiredError,
    TokenInvalidError,
    TokenIssuer,
)
from account_service.schemas.account import Role

SECRET = "unit-test-secret"


class TestPasswordHasher(unittest.TestCase):
    """PasswordHasher salts every hash and verifies without raising on a wrong password."""

    def setUp(self) -> None:
        self.hasher = PasswordHasher(rounds=4)

    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = self.hasher.hash("password123")
        self.assertNotEqual(hashed, "password123")
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(self.hasher.verify("password123", hashed))

    def test_same_input_gives_different_hashes(self) -> None:
        first = self.hasher.hash("password123")
        second = self.hasher.hash("password123")
        self.assertNotEqual(first, second)
        self.assertTrue(self.hasher.verify("password123", first))
        self.assertTrue(self.hasher.verify("password123", second))

    def test_wrong_password_returns_false(self) -> None:
        hashed = self.hasher.hash("password123")
        self.assertFalse(self.hasher.verify("wrongpassword", hashed))

    def test_work_factor_is_embedded_in_hash(self) -> None:
        hashed = self.hasher.hash("password123")
        self.assertEqual(hashed.split("$")[2], "04")

    def test_malformed_hash_raises(self) -> None:
        with self.assertRaises(HashingError):
            self.hasher.verify("password123", "not-a-bcrypt-hash")

    def test_primitive_failure_raises_hashing_error(self) -> None:
        with patch("account_service.core.security.bcrypt.gensalt", side_effect=ValueError("boom")):
            with self.assertRaises(HashingError):
                self.hasher.hash("password123")

    def test_long_password_uses_first_72_bytes(self) -> None:
        base = "a" * 72
        hashed = self.hasher.hash(base + "tail")
        self.assertTrue(self.hasher.verify(base, hashed))

    def test_from_settings_uses_bcrypt_rounds(self) -> None:
        cfg = Settings(_env_file=None, DATABASE_URL="sqlite://", BCRYPT_ROUNDS=5)
        self.assertEqual(PasswordHasher.from_settings(cfg).rounds, 5)


class TestTokenIssuer(unittest.TestCase):
    """TokenIssuer round-trips claims and distinguishes expired from invalid tokens."""

    def setUp(self) -> None:
        self.issuer = TokenIssuer(secret=SECRET, default_ttl=timedelta(minutes=60))

    def test_issue_then_verify_round_trips(self) -> None:
        token = self.issuer.issue("acct-1", Role.INSTRUCTOR)
        claims = self.issuer.verify(token)
        self.assertEqual(claims, TokenClaims(account_id="acct-1", role=Role.INSTRUCTOR))

    def test_accepts_role_as_string(self) -> None:
        claims = self.issuer.verify(self.issuer.issue("acct-1", "admin"))
        self.assertEqual(claims.role, Role.ADMIN)

    def test_payload_contains_iat_and_exp_from_default_ttl(self) -> None:
        fixed = datetime(2030, 1, 1, 12, 0, tzinfo=UTC)
        issuer = TokenIssuer(secret=SECRET, default_ttl=timedelta(minutes=30), clock=lambda: fixed)
        token = issuer.issue("acct-1", Role.LEARNER)
        payload = jwt.decode(
            token,
            SECRET,
            algorithms=["HS256"],
            options={"verify_exp": False, "verify_iat": False},
        )
        self.assertEqual(payload["sub"], "acct-1")
        self.assertEqual(payload["role"], "learner")
        self.assertEqual(payload["iat"], int(fixed.timestamp()))
        self.assertEqual(payload["exp"], int((fixed + timedelta(minutes=30)).timestamp()))

    def test_expired_token_raises_expired_error(self) -> None:
        past = datetime.now(UTC) - timedelta(hours=2)
        issuer = TokenIssuer(secret=SECRET, default_ttl=timedelta(hours=1), clock=lambda: past)
        token = issuer.issue("acct-1", Role.LEARNER)
        with self.assertRaises(TokenExpiredError):
            self.issuer.verify(token)

    def test_explicit_ttl_overrides_default(self) -> None:
        token = self.issuer.issue("acct-1", Role.LEARNER, ttl=timedelta(seconds=-1))
        with self.assertRaises(TokenExpiredError):
            self.issuer.verify(token)

    def test_wrong_secret_is_invalid(self) -> None:
        other = TokenIssuer(secret="another-secret")
        token = other.issue("acct-1", Role.LEARNER)
        with self.assertRaises(TokenInvalidError):
            self.issuer.verify(token)

    def test_garbage_token_is_invalid(self) -> None:
        with self.assertRaises(TokenInvalidError):
            self.issuer.verify("not.a.jwt")

    def test_missing_role_claim_is_invalid(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "acct-1", "iat": now, "exp": now + timedelta(minutes=5)},
            SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(TokenInvalidError):
            self.issuer.verify(token)

    def test_unknown_role_is_invalid(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "acct-1", "role": "superuser", "iat": now, "exp": now + timedelta(minutes=5)},
            SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(TokenInvalidError):
            self.issuer.verify(token)

    def test_failures_share_a_base_class(self) -> None:
        self.assertTrue(issubclass(TokenExpiredError, TokenError))
        self.assertTrue(issubclass(TokenInvalidError, TokenError))
        self.assertFalse(issubclass(TokenExpiredError, TokenInvalidError))

    def test_from_settings(self) -> None:
        cfg = Settings(
            _env_file=None,
            DATABASE_URL="sqlite://",
            JWT_SECRET="from-settings",
            JWT_EXPIRE_MINUTES=5,
        )
        issuer = TokenIssuer.from_settings(cfg)
        self.assertEqual(issuer.default_ttl, timedelta(minutes=5))
        token = issuer.issue("acct-9", Role.LEARNER)
        self.assertEqual(
            jwt.decode(token, "from-settings", algorithms=["HS256"])["sub"], "acct-9"
        )
