"""Database connection and session management."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from account_service.core.config import Settings, settings


def engine_options(cfg: Settings) -> dict[str, Any]:
    """Build create_engine keyword arguments, including caller-side timeouts."""
    if cfg.is_sqlite:
        return {
            "echo": cfg.DEBUG,
            "connect_args": {
                "check_same_thread": False,
                "timeout": cfg.DB_TIMEOUT_SEC,
            },
        }
    timeout_ms = int(cfg.DB_TIMEOUT_SEC * 1000)
    return {
        "echo": cfg.DEBUG,
        "pool_pre_ping": True,
        "pool_timeout": cfg.DB_TIMEOUT_SEC,
        "connect_args": {
            "connect_timeout": max(1, int(cfg.DB_TIMEOUT_SEC)),
            "options": f"-c statement_timeout={timeout_ms}",
        },
    }


def build_engine(cfg: Settings) -> Engine:
    return create_engine(cfg.DATABASE_URL, **engine_options(cfg))


engine = build_engine(settings)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False
