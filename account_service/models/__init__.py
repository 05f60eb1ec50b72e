"""SQLAlchemy ORM models."""

from account_service.models.account import Account
from account_service.models.base import Base

__all__ = ["Account", "Base"]
