"""Pydantic request/response schemas."""

from account_service.schemas.account import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    ProfileUpdate,
    PublicAccount,
    RegisterRequest,
    Role,
)
from account_service.schemas.health import HealthResponse

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "ProfileUpdate",
    "PublicAccount",
    "RegisterRequest",
    "Role",
]
