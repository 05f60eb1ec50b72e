"""Account persistence: lookups and atomic, uniqueness-checked writes."""

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from account_service.models import Account

logger = logging.getLogger(__name__)


class DuplicateAccountError(Exception):
    """Raised when a write violates the username or email unique index."""


class AccountStore:
    """Reads and writes Account rows through a request-scoped Session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_by_id(self, account_id: str) -> Account | None:
        return self.db.get(Account, account_id)

    def get_by_email(self, email: str) -> Account | None:
        return self.db.query(Account).filter(Account.email == email).first()

    def get_by_username(self, username: str) -> Account | None:
        return self.db.query(Account).filter(Account.username == username).first()

    def find_by_email_or_username(self, email: str, username: str) -> Account | None:
        return (
            self.db.query(Account)
            .filter(or_(Account.email == email, Account.username == username))
            .first()
        )

    def add(self, account: Account) -> Account:
        """Insert a new account and commit. Raises DuplicateAccountError on a unique violation."""
        self.db.add(account)
        return self._commit(account)

    def save(self, account: Account) -> Account:
        """Commit pending changes to an existing account."""
        return self._commit(account)

    def _commit(self, account: Account) -> Account:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info("Account write rejected by unique constraint: %s", e.orig)
            raise DuplicateAccountError("username or email already exists") from e
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(account)
        return account
