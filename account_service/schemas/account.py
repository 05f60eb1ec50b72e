"""Request/response schemas for account endpoints."""

import re
from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import AfterValidator, AliasChoices, BaseModel, ConfigDict, Field

USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 30
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128
EMAIL_MAX_LEN = 254

# Basic shape only: something@something.something
EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")


class Role(str, Enum):
    """Closed set of account roles."""

    LEARNER = "learner"
    INSTRUCTOR = "instructor"
    ADMIN = "admin"


def normalize_username(value: str) -> str:
    return value.strip()


def normalize_email(value: str) -> str:
    return value.strip().lower()


def _check_username(value: str) -> str:
    value = normalize_username(value)
    if not (USERNAME_MIN_LEN <= len(value) <= USERNAME_MAX_LEN):
        raise ValueError(
            f"username must be {USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} characters"
        )
    if not value.isascii() or not value.isalnum():
        raise ValueError("username must only contain letters and digits")
    return value


def _check_email(value: str) -> str:
    value = normalize_email(value)
    if len(value) > EMAIL_MAX_LEN or not EMAIL_PATTERN.fullmatch(value):
        raise ValueError("email must be a valid email address")
    return value


Username = Annotated[str, AfterValidator(_check_username)]
Email = Annotated[str, AfterValidator(_check_email)]
Password = Annotated[str, Field(min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)]


class RegisterRequest(BaseModel):
    """New account details."""

    username: Username = Field(..., description="Unique username (3-30 letters/digits)")
    email: Email = Field(..., description="Unique email address")
    password: Password = Field(..., description="Password (at least 6 characters)")
    role: Role | None = Field(default=None, description="Defaults to learner")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: Email = Field(..., description="Registered email address")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)


class ProfileUpdate(BaseModel):
    """
    Partial profile update. Only these fields may change; id, role and
    timestamps are not writable through this schema.
    """

    model_config = ConfigDict(extra="forbid")

    username: Username | None = None
    email: Email | None = None
    password: Password | None = None

    def changes(self) -> dict[str, str]:
        """Fields the caller actually supplied with a non-null value."""
        return {
            k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None
        }


class PublicAccount(BaseModel):
    """Account as returned to callers (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., validation_alias=AliasChoices("id", "_id"), serialization_alias="_id")
    username: str
    email: str
    role: Role
    created_at: datetime = Field(
        ...,
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )
    updated_at: datetime = Field(
        ...,
        validation_alias=AliasChoices("updated_at", "updatedAt"),
        serialization_alias="updatedAt",
    )


class LoginResponse(BaseModel):
    """Session token plus the authenticated account."""

    token: str = Field(..., description="JWT; send as Authorization: Bearer <token>")
    user: PublicAccount


class ErrorResponse(BaseModel):
    """Body of every error response."""

    message: str
