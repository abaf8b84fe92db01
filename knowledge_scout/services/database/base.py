"""
SQLAlchemy engine and session management.

A single Database instance is created at startup and handed to the
services and request dependencies that need a session.
"""
from pathlib import Path
from typing import Iterator
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from ...core.logging_config import get_logger

logger = get_logger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owns the SQLAlchemy engine and session factory.
    
    Works with any SQLAlchemy URL. SQLite URLs get the connection arguments
    needed to share the engine between request handlers and background tasks.
    """
    
    def __init__(self, database_url: str, echo: bool = False):
        """
        Create engine and session factory.
        
        Args:
            database_url: SQLAlchemy database URL
            echo: Log emitted SQL statements
        """
        self.database_url = database_url
        self.engine: Engine = self._create_engine(database_url, echo)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine
        )
    
    @staticmethod
    def _create_engine(database_url: str, echo: bool) -> Engine:
        if not database_url.startswith("sqlite"):
            return create_engine(database_url, echo=echo, pool_pre_ping=True)
        
        url = make_url(database_url)
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        
        kwargs = {"connect_args": {"check_same_thread": False}}  # Needed for SQLite
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, otherwise every session sees an empty database
            kwargs["poolclass"] = StaticPool
        engine = create_engine(database_url, echo=echo, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    
    def create_tables(self) -> None:
        """Create all tables that do not exist yet."""
        # Import models so they are registered on Base.metadata
        from ... import models  # noqa: F401
        
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables checked/created")
    
    def session(self) -> Session:
        """Open a new session. Caller is responsible for closing it."""
        return self.SessionLocal()
    
    def get_db(self) -> Iterator[Session]:
        """Yield a session and close it afterwards (FastAPI dependency style)."""
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()
    
    def close(self) -> None:
        self.engine.dispose()
