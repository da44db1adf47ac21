"""
Async engine and per-request session for the link store.

Production runs on PostgreSQL through asyncpg. DEV_MODE may also point at a
SQLite file or an in-memory database through aiosqlite; those engines get
foreign keys switched on so deleting a user or an issue cascades the same way
it does in PostgreSQL.
"""
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from core.config import get_settings


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:  # noqa: ARG001
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str) -> AsyncEngine:
    """
    Create the async engine for `database_url`.

    Server databases get a pre-pinged connection pool sized from settings.
    An in-memory SQLite database is held on one shared connection, otherwise
    every pooled connection would see its own empty database.
    """
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        settings = get_settings()
        return create_async_engine(
            url,
            echo=False,
            pool_pre_ping=True,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
        )

    options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if url.database in (None, "", ":memory:"):
        options["poolclass"] = StaticPool
    engine = create_async_engine(url, echo=False, **options)
    event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


engine = build_engine(get_settings().database_url)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """
    Yield the request's session and commit it once the request succeeds.

    Link services only flush. A rejected validation or ownership check raises
    out of the request, and the rollback here discards anything flushed.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
