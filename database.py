# database.py
"""
SQLAlchemy database connection and session management.

This module provides:
- Engine construction from the configured DATABASE_URL
- Session factory bound to that engine
- A FastAPI dependency yielding one session per request

The engine and session factory are built by create_app() and stored on
app.state; nothing here is a module-level singleton.

Usage:
     from database import get_session

     # In FastAPI routes:
     @router.get("/items")
     def get_items(db: Session = Depends(get_session)):
          return db.query(Item).all()
"""
import logging
from contextlib import contextmanager
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from errors import APIError

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
     # SQLite ignores ON DELETE rules unless enabled per connection
     cursor = dbapi_connection.cursor()
     cursor.execute("PRAGMA foreign_keys=ON")
     cursor.close()


def build_engine(database_url: str, echo: bool = False) -> Engine:
     """
     Create the SQLAlchemy engine.

     SQLite URLs get a single shared connection for in-memory databases and
     cross-thread access; every other backend uses a recycled QueuePool.
     """
     if database_url.startswith("sqlite"):
          in_memory = database_url in ("sqlite://", "sqlite:///:memory:")
          engine = create_engine(
               database_url,
               connect_args={"check_same_thread": False},
               poolclass=StaticPool if in_memory else None,
               echo=echo,
          )
          event.listen(engine, "connect", _enable_sqlite_foreign_keys)
          return engine

     return create_engine(
          database_url,
          poolclass=QueuePool,
          pool_size=5,
          max_overflow=10,
          pool_timeout=30,
          pool_recycle=1800,  # Recycle connections after 30 minutes
          echo=echo,
     )


def build_session_factory(engine: Engine) -> sessionmaker:
     return sessionmaker(
          bind=engine,
          autocommit=False,
          autoflush=False,
          expire_on_commit=False,
     )


def get_session(request: Request) -> Generator[Session, None, None]:
     """
     FastAPI dependency that provides a database session.

     Routes commit explicitly; anything left pending when the route raises
     is rolled back here.

     Yields:
          Session: SQLAlchemy database session
     """
     session = request.app.state.session_factory()
     try:
          yield session
     except Exception:
          session.rollback()
          raise
     finally:
          session.close()


@contextmanager
def get_session_context(session_factory: sessionmaker) -> Generator[Session, None, None]:
     """
     Context manager for database sessions (for use outside FastAPI routes).

     Usage:
          with get_session_context(factory) as db:
               users = db.query(User).all()
     """
     session = session_factory()
     try:
          yield session
          session.commit()
     except Exception:
          session.rollback()
          raise
     finally:
          session.close()


def init_db(engine: Engine) -> None:
     """
     Initialize database tables.

     Creates all tables defined in the models if they don't exist.
     For production, use Alembic migrations instead.
     """
     from models import Base
     Base.metadata.create_all(bind=engine)


def check_connection(engine: Engine) -> bool:
     """
     Test database connectivity.

     Returns:
          bool: True if connection successful, False otherwise
     """
     try:
          with engine.connect() as conn:
               conn.execute(text("SELECT 1"))
          return True
     except Exception as e:
          logger.error("Database connection failed: %s", e)
          return False


def commit_or_conflict(db: Session, message: str) -> None:
     """
     Commit the session; a unique/foreign-key violation is rolled back and
     reported as 409 with the given message.
     """
     try:
          db.commit()
     except IntegrityError as exc:
          db.rollback()
          logger.warning("%s: %s", message, exc.orig)
          raise APIError(409, message, str(exc.orig))
