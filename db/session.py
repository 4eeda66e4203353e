import logging
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session

from api.errors import PersistenceError
from config import config

logger = logging.getLogger(__name__)

DATABASE_URL = config.database.url

if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL environment variable is required")

connect_args: dict = {}
if config.database.is_postgres and config.database.statement_timeout_ms > 0:
    # Server-side deadline for every statement issued on this engine
    connect_args["options"] = (
        f"-c statement_timeout={config.database.statement_timeout_ms}"
    )

engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    echo=config.database.echo,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency for database sessions."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def commit_or_raise(session: Session, action: str) -> None:
    """
    Commit the session, rolling back on failure.

    Args:
        session: Session holding the pending changes.
        action: What the commit completes, e.g. "creating a tweet".

    Raises:
        PersistenceError: If the commit fails.
    """
    try:
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Error while {action}: {e}")
        raise PersistenceError(f"Something went wrong while {action}") from e
