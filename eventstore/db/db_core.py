"""Core database functionality and configuration.

This module provides the connection provider used by every record class:
configuration, engine setup, schema bootstrap and short-lived connections.
A `Database` is passed explicitly to the record factories instead of being
reached through a global.
"""

from contextlib import contextmanager
import logging
from pathlib import Path
from typing import Optional, Dict, Any, Generator
import os

from sqlalchemy import create_engine, Engine, Connection, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from .schema import metadata
from ..config.environment import IS_PRODUCTION_ENVIRONMENT, SQL_ECHO

logger = logging.getLogger(__name__)

class DatabaseConfig:
    """Database configuration settings."""

    def __init__(
        self,
        database_url: Optional[str] = None,
        sqlite_path: Optional[Path] = None,
        echo: bool = SQL_ECHO,
        pool_size: int = 3,
        max_overflow: int = 4,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        pool_pre_ping: bool = True
    ):
        """
        Initialize database configuration.

        An explicit database_url always wins. Otherwise, in production
        environment DATABASE_URL must be set, and in development a SQLite
        file is used.

        Args:
            database_url: Full SQLAlchemy URL, overrides environment handling
            sqlite_path: Path to SQLite database file (for development)
            echo: Whether to echo SQL statements
            pool_size: Size of the connection pool (permanent connections)
            max_overflow: Maximum number of extra connections to allow temporarily
            pool_timeout: Seconds to wait for an available connection
            pool_recycle: Seconds before connections are recycled
            pool_pre_ping: Whether to ping connections before using them

        Raises:
            ValueError: If in production environment and no database URL is provided
                      either via database_url parameter or DATABASE_URL env variable
        """
        self.sqlite_path = None
        if database_url:
            self.database_url = database_url
        elif IS_PRODUCTION_ENVIRONMENT:
            self.database_url = os.environ.get('DATABASE_URL')
            if not self.database_url:
                raise ValueError(
                    "Database URL must be provided either via database_url parameter "
                    "or DATABASE_URL environment variable when in production environment"
                )
        else:
            self.sqlite_path = sqlite_path or Path(__file__).parent.parent.parent / 'data' / 'events.db'
            self.database_url = f"sqlite:///{self.sqlite_path}"

        self.echo = echo
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_timeout = pool_timeout
        self.pool_recycle = pool_recycle
        self.pool_pre_ping = pool_pre_ping

    @property
    def connection_url(self) -> str:
        """Get the database connection URL."""
        return self.database_url

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith('sqlite')

    def get_engine_args(self) -> Dict[str, Any]:
        """Get SQLAlchemy engine arguments based on configuration."""
        args = {"echo": self.echo}

        if self.is_sqlite:
            # StaticPool keeps in-memory databases alive across connections
            args["connect_args"] = {"check_same_thread": False}
            args["poolclass"] = StaticPool
        else:
            args.update({
                "pool_size": self.pool_size,
                "max_overflow": self.max_overflow,
                "pool_timeout": self.pool_timeout,
                "pool_recycle": self.pool_recycle,
                "pool_pre_ping": self.pool_pre_ping
            })

        return args

class DatabaseError(Exception):
    """Base exception for database-related errors."""
    pass

class ConnectionError(DatabaseError):
    """Raised when there are issues connecting to the database."""
    pass

class StoreFault(DatabaseError):
    """Raised when a statement fails at the driver or connection level."""
    pass

class Database:
    """Connection provider shared by all records created through it."""

    def __init__(self, config: Optional[DatabaseConfig] = None):
        self.config = config or DatabaseConfig()
        self.engine: Optional[Engine] = None
        self._tables_checked = False

        self._setup_engine()

    def _setup_engine(self) -> None:
        """Set up the SQLAlchemy engine."""
        if self.config.sqlite_path:
            Path(self.config.sqlite_path).parent.mkdir(parents=True, exist_ok=True)
        try:
            self.engine = create_engine(
                self.config.connection_url,
                **self.config.get_engine_args()
            )
        except Exception as e:
            raise ConnectionError(f"Failed to create database engine: {e}") from e

    def init_db(self) -> None:
        """Initialize the database schema."""
        if not self.engine:
            raise ConnectionError("Database engine not initialized")

        try:
            metadata.create_all(self.engine)
            self._tables_checked = True
            logger.info("Database schema initialized successfully")
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to initialize database schema: {e}") from e

    def ensure_tables_exist(self) -> None:
        """Ensure all required database tables exist."""
        if self._tables_checked:
            return
        if not self.engine:
            raise ConnectionError("Database engine not initialized")

        try:
            existing_tables = inspect(self.engine).get_table_names()
            required_tables = set(metadata.tables)

            if not required_tables.issubset(existing_tables):
                logger.info("Some tables missing, initializing database schema")
                metadata.create_all(self.engine)
                logger.info("Database schema initialized successfully")

            self._tables_checked = True
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to verify/create database schema: {e}") from e

    @contextmanager
    def connect(self) -> Generator[Connection, None, None]:
        """
        Provide a connection wrapped in its own short transaction.

        The transaction commits when the block exits normally and rolls back
        otherwise. Driver errors are re-raised as StoreFault; nothing is retried.

        Example:
            with db.connect() as conn:
                row = conn.execute(select(events).where(events.c.id == 1)).first()

        Raises:
            StoreFault: If a statement or the connection fails
            DatabaseError: If database schema verification fails
        """
        self.ensure_tables_exist()

        try:
            with self.engine.begin() as conn:
                yield conn
        except SQLAlchemyError as e:
            logger.error(f"Database statement failed: {e}")
            raise StoreFault(f"Database statement failed: {e}") from e
