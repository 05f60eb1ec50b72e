"""
Create an account (e.g. the first admin). Run from project root:
  python -m account_service.scripts.create_account USERNAME EMAIL PASSWORD [role]
Example:
  python -m account_service.scripts.create_account admin admin@example.com your-secure-password admin
"""
import argparse
import sys
from collections.abc import Callable

import pydantic
from sqlalchemy.orm import Session

from account_service.core.config import Settings, get_settings
from account_service.core.database import SessionLocal
from account_service.core.exceptions import AccountServiceError
from account_service.core.security import PasswordHasher, TokenIssuer
from account_service.schemas.account import RegisterRequest, Role
from account_service.services.account_store import AccountStore
from account_service.services.accounts import AccountService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create an account without going through the API.")
    parser.add_argument("username", help="Username (3-30 letters/digits)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (at least 6 characters)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.LEARNER.value,
        choices=[r.value for r in Role],
    )
    return parser


def main(
    argv: list[str] | None = None,
    session_factory: Callable[[], Session] = SessionLocal,
    settings: Settings | None = None,
) -> int:
    args = build_parser().parse_args(argv)
    settings = settings or get_settings()

    try:
        request = RegisterRequest(
            username=args.username,
            email=args.email,
            password=args.password,
            role=args.role,
        )
    except pydantic.ValidationError as e:
        for err in e.errors():
            print(f"{err['loc'][0]}: {err['msg']}", file=sys.stderr)
        return 1

    db = session_factory()
    try:
        service = AccountService(
            store=AccountStore(db),
            hasher=PasswordHasher.from_settings(settings),
            tokens=TokenIssuer.from_settings(settings),
        )
        try:
            account = service.register(
                request.username, request.email, request.password, request.role
            )
        except AccountServiceError as e:
            print(e.message, file=sys.stderr)
            return 1
        print(f"Created account '{account.username}' ({account.id}) with role '{account.role.value}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
