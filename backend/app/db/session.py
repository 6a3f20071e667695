"""Database session management."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import settings


def get_database_url() -> str:
    """Get the database URL, ensuring the SQLite directory exists."""
    if settings.database_url:
        return settings.database_url

    db_path = settings.db_path
    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        # Fall back to local directory for development
        db_path = Path("./config") / db_path.name
        db_path.parent.mkdir(parents=True, exist_ok=True)

    return f"sqlite+aiosqlite:///{db_path}"


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _unicode_lower(value: str | None) -> str | None:
    return value.lower() if value is not None else None


def register_sqlite_functions(dbapi_connection) -> None:
    """Replace SQLite's ASCII-only ``lower()`` with Python's Unicode one.

    Post search compares ``lower(title)`` against a term lowered in Python,
    so both sides must fold case the same way for accented text.
    """
    dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


_database_url = get_database_url()

engine = create_async_engine(
    _database_url,
    echo=settings.debug,
    future=True,
    connect_args={"timeout": 30} if _is_sqlite(_database_url) else {},
    pool_pre_ping=True,
)


if _is_sqlite(_database_url):

    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        """Enable WAL mode and foreign keys on each SQLite connection."""
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.execute("PRAGMA busy_timeout=30000")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
        register_sqlite_functions(dbapi_connection)


async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database sessions.

    The session commits when the request handler returns and rolls back
    if it raises, so a post write and its category counter update land
    together or not at all.

    Yields:
        An async database session.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
