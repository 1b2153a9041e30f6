# File: infrastructure/db.py

import logging
import threading
from contextlib import contextmanager
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError, TimeoutError as PoolTimeout

from domain.errors import DataAccessError, PoolTimeoutError
from infrastructure.settings import (
    POOL_ACQUIRE_TIMEOUT,
    POOL_MAX_SIZE,
    load_settings,
)

logger = logging.getLogger(__name__)

_db: Optional["Database"] = None
_db_lock = threading.Lock()


def normalize_database_url(database_url: str) -> str:
    """SQLAlchemy only accepts the postgresql:// scheme, not the libpq postgres:// alias."""
    if database_url.startswith("postgres://"):
        return "postgresql+psycopg2://" + database_url[len("postgres://"):]
    if database_url.startswith("postgresql://"):
        return "postgresql+psycopg2://" + database_url[len("postgresql://"):]
    return database_url


class Database:
    """
    Shared handle over a SQLAlchemy engine.

    The engine's QueuePool holds at most pool_size connections with no
    overflow; a checkout waits pool_timeout seconds before it fails, which
    surfaces here as PoolTimeoutError.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def _connect(self):
        try:
            return self.engine.connect()
        except PoolTimeout as e:
            raise PoolTimeoutError("No database connection available in time", e) from e
        except SQLAlchemyError as e:
            raise DataAccessError("Could not obtain a database connection", e) from e

    @contextmanager
    def connection(self):
        """Check a connection out for the duration of the block."""
        with self._connect() as conn:
            yield conn

    @contextmanager
    def transaction(self):
        """
        Yield a connection inside one transaction (engine.begin()).
        Commits on success, rolls back on any exception and re-raises it.
        """
        try:
            with self.engine.begin() as conn:
                yield conn
        except PoolTimeout as e:
            logger.error(f"Transaction not started: {e}")
            raise PoolTimeoutError("No database connection available in time", e) from e
        except SQLAlchemyError as e:
            logger.error(f"Transaction rolled back: {e}")
            raise DataAccessError("Transaction failed", e) from e
        except Exception as e:
            logger.error(f"Transaction rolled back: {e}")
            raise

    def close(self) -> None:
        self.engine.dispose()


def create_pool(
    database_url: str,
    max_size: int = POOL_MAX_SIZE,
    acquire_timeout: float = POOL_ACQUIRE_TIMEOUT,
) -> Database:
    """Build an engine bounded to max_size connections with an acquisition timeout."""
    try:
        engine = create_engine(
            normalize_database_url(database_url),
            pool_size=max_size,
            max_overflow=0,
            pool_timeout=acquire_timeout,
            pool_pre_ping=True,
            connect_args={"connect_timeout": int(acquire_timeout)},
        )
    except SQLAlchemyError as e:
        logger.error(f"Invalid database configuration: {e}")
        raise DataAccessError("Could not create the database pool", e) from e
    logger.info(f"Database pool ready (max {max_size} connections)")
    return Database(engine)


def get_pool() -> Database:
    """Process-wide database handle, created on first use from the environment settings."""
    global _db
    with _db_lock:
        if _db is None:
            _db = create_pool(load_settings().database_url)
        return _db


def set_pool(db: Optional[Database]) -> None:
    """Install an already-built handle as the process-wide one (None resets it)."""
    global _db
    with _db_lock:
        _db = db
