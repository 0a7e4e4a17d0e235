"""
Identity database session management.
"""
import logging
from pathlib import Path
from typing import Iterator
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from app.core.errors import StorageUnavailable, ERR_DATABASE_ACCESS
from app.db.base import IdentityBase
import app.models  # noqa: F401  registers the models on their bases

logger = logging.getLogger(__name__)

IDENTITY_DB_FILENAME = "users.db"


def create_identity_engine(data_path: str, echo: bool = False) -> Engine:
    """Create the shared users.db engine, creating the data directory and table."""
    try:
        Path(data_path).mkdir(parents=True, exist_ok=True)
        path = Path(data_path) / IDENTITY_DB_FILENAME
        engine = create_engine(
            f"sqlite:///{path}",
            echo=echo,
            connect_args={"check_same_thread": False},
        )
        IdentityBase.metadata.create_all(bind=engine)
    except (OSError, SQLAlchemyError) as e:
        logger.error(f"Failed to initialize identity database in {data_path}: {e}", exc_info=True)
        raise StorageUnavailable(ERR_DATABASE_ACCESS) from e
    logger.info(f"Identity database ready at {path}")
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request) -> Iterator[Session]:
    """Dependency for getting an identity database session."""
    db = request.app.state.identity_sessionmaker()
    try:
        yield db
    finally:
        db.close()
