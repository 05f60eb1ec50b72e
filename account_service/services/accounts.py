"""Account use cases: register, authenticate, fetch and update profiles."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from account_service.core.exceptions import (
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from account_service.core.security import PasswordHasher, TokenIssuer
from account_service.models import Account
from account_service.schemas.account import (
    LoginResponse,
    ProfileUpdate,
    PublicAccount,
    Role,
    normalize_email,
    normalize_username,
)
from account_service.services.account_store import AccountStore, DuplicateAccountError

logger = logging.getLogger(__name__)

# Same text for unknown email and wrong password so callers cannot probe for accounts.
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
DUPLICATE_ACCOUNT_MESSAGE = "Email or username already in use"
ACCOUNT_NOT_FOUND_MESSAGE = "User not found"


def _utcnow() -> datetime:
    return datetime.now(UTC)


def to_public(account: Account) -> PublicAccount:
    """Strip the password hash and anything else not meant for callers."""
    return PublicAccount.model_validate(account)


class AccountService:
    """
    Orchestrates AccountStore, PasswordHasher and TokenIssuer.

    Holds no state of its own: every read and write goes to the store. Each
    operation makes at most one committed write and none when it fails.
    """

    def __init__(
        self,
        store: AccountStore,
        hasher: PasswordHasher,
        tokens: TokenIssuer,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.store = store
        self.hasher = hasher
        self.tokens = tokens
        self._clock = clock

    def register(
        self,
        username: str,
        email: str,
        password: str,
        role: Role | str | None = None,
    ) -> PublicAccount:
        username = normalize_username(username)
        email = normalize_email(email)
        if self.store.find_by_email_or_username(email, username) is not None:
            raise ConflictError(DUPLICATE_ACCOUNT_MESSAGE)

        try:
            role = Role(role) if role is not None else Role.LEARNER
        except ValueError as e:
            allowed = ", ".join(r.value for r in Role)
            raise ValidationError(f"role must be one of: {allowed}") from e

        now = self._clock()
        account = Account(
            username=username,
            email=email,
            password_hash=self.hasher.hash(password),
            role=role.value,
            created_at=now,
            updated_at=now,
        )
        try:
            account = self.store.add(account)
        except DuplicateAccountError as e:
            # Lost a race with a concurrent registration after the pre-check.
            raise ConflictError(DUPLICATE_ACCOUNT_MESSAGE) from e
        logger.info("Account registered: id=%s role=%s", account.id, account.role)
        return to_public(account)

    def authenticate(self, email: str, password: str) -> LoginResponse:
        account = self.store.get_by_email(normalize_email(email))
        if account is None:
            logger.info("Login failed: unknown email")
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)
        if not self.hasher.verify(password, account.password_hash):
            logger.info("Login failed: wrong password for account id=%s", account.id)
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        token = self.tokens.issue(account.id, account.role)
        return LoginResponse(token=token, user=to_public(account))

    def get_by_id(self, account_id: str) -> PublicAccount:
        account = self.store.get_by_id(account_id)
        if account is None:
            raise NotFoundError(ACCOUNT_NOT_FOUND_MESSAGE)
        return to_public(account)

    def update(self, account_id: str, changes: ProfileUpdate) -> PublicAccount:
        account = self.store.get_by_id(account_id)
        if account is None:
            raise NotFoundError(ACCOUNT_NOT_FOUND_MESSAGE)

        fields = changes.changes()
        if "username" in fields:
            account.username = normalize_username(fields["username"])
        if "email" in fields:
            account.email = normalize_email(fields["email"])
        if "password" in fields:
            account.password_hash = self.hasher.hash(fields["password"])
        account.updated_at = self._clock()

        try:
            account = self.store.save(account)
        except DuplicateAccountError as e:
            raise ConflictError(DUPLICATE_ACCOUNT_MESSAGE) from e
        logger.info(
            "Account updated: id=%s fields=%s",
            account.id,
            ",".join(sorted(fields)) or "-",
        )
        return to_public(account)
