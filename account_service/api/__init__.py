"""HTTP routes."""

from account_service.api import health, users

__all__ = ["health", "users"]
