"""Account endpoints: register, login, and the caller's own profile."""

from fastapi import APIRouter, status

from account_service.api.auth import AccountServiceDep, CurrentClaims
from account_service.schemas.account import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    ProfileUpdate,
    PublicAccount,
    RegisterRequest,
)

router = APIRouter()

_AUTH_ERRORS = {
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
}


@router.post(
    "/register",
    response_model=PublicAccount,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_409_CONFLICT: {"model": ErrorResponse}},
)
def register(body: RegisterRequest, accounts: AccountServiceDep) -> PublicAccount:
    """Create an account. Username and email must both be unused."""
    return accounts.register(
        username=body.username,
        email=body.email,
        password=body.password,
        role=body.role,
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse}},
)
def login(body: LoginRequest, accounts: AccountServiceDep) -> LoginResponse:
    """
    Authenticate with email and password; returns a JWT and the account.
    Include the token in the Authorization header as: Bearer <token>
    """
    return accounts.authenticate(body.email, body.password)


@router.get("/profile", response_model=PublicAccount, responses=_AUTH_ERRORS)
def get_profile(claims: CurrentClaims, accounts: AccountServiceDep) -> PublicAccount:
    return accounts.get_by_id(claims.account_id)


@router.put(
    "/profile",
    response_model=PublicAccount,
    responses={**_AUTH_ERRORS, status.HTTP_409_CONFLICT: {"model": ErrorResponse}},
)
def update_profile(
    body: ProfileUpdate,
    claims: CurrentClaims,
    accounts: AccountServiceDep,
) -> PublicAccount:
    """Change username, email and/or password. Omitted fields are left as they are."""
    return accounts.update(claims.account_id, body)
