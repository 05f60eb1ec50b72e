"""Typed failures raised by the account service and mapped to HTTP responses.

Messages are safe to return to callers: they never echo passwords, hashes or
whether a given email is registered.
"""


class AccountServiceError(Exception):
    """Base class for failures with a caller-facing status code and message."""

    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(
        self,
        message: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.headers = headers
        super().__init__(self.message)


class ValidationError(AccountServiceError):
    """Malformed or missing request fields."""

    status_code = 400
    default_message = "Invalid request"


class ConflictError(AccountServiceError):
    """Username or email already belongs to another account."""

    status_code = 409
    default_message = "Email or username already in use"


class UnauthorizedError(AccountServiceError):
    """Bad credentials, or a missing, invalid or expired token."""

    status_code = 401
    default_message = "Invalid email or password"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class NotFoundError(AccountServiceError):
    """No account exists for the given id."""

    status_code = 404
    default_message = "User not found"
