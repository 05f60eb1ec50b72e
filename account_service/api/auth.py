"""Request-scoped dependencies: account service wiring and bearer-token auth."""

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from account_service.core.config import Settings, get_settings
from account_service.core.database import get_db
from account_service.core.exceptions import UnauthorizedError
from account_service.core.security import (
    PasswordHasher,
    TokenClaims,
    TokenExpiredError,
    TokenInvalidError,
    TokenIssuer,
)
from account_service.services.account_store import AccountStore
from account_service.services.accounts import AccountService

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def get_token_issuer(
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenIssuer:
    return TokenIssuer.from_settings(settings)


def get_account_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    tokens: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> AccountService:
    """Build an AccountService bound to this request's DB session."""
    return AccountService(
        store=AccountStore(db),
        hasher=PasswordHasher.from_settings(settings),
        tokens=tokens,
    )


def get_current_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> TokenClaims:
    """Dependency: require a valid Bearer JWT and return its claims. Raises 401 if missing or invalid."""
    if credentials is None:
        raise UnauthorizedError("Not authenticated")
    try:
        return tokens.verify(credentials.credentials)
    except TokenExpiredError:
        logger.info("Rejected expired session token")
        raise UnauthorizedError("Invalid or expired token")
    except TokenInvalidError as e:
        logger.warning("Rejected invalid session token: %s", e)
        raise UnauthorizedError("Invalid or expired token")


AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
CurrentClaims = Annotated[TokenClaims, Depends(get_current_claims)]
