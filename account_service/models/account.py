"""ORM model for registered user accounts."""

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, String

from account_service.models.base import Base


def _new_account_id() -> str:
    return str(uuid.uuid4())


class Account(Base):
    """
    One registered user.

    username and email are each unique across all accounts; the unique indexes
    are what makes concurrent registrations safe.
    role: 'learner', 'instructor' or 'admin'
    """

    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint(
            "role IN ('learner', 'instructor', 'admin')",
            name="ck_accounts_role",
        ),
    )

    id = Column(String(36), primary_key=True, default=_new_account_id)
    username = Column(String(30), nullable=False, unique=True, index=True)
    email = Column(String(254), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="learner")
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"Account(id={self.id!r}, username={self.username!r}, role={self.role!r})"
