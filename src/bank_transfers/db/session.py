from dotenv import load_dotenv, find_dotenv
load_dotenv(find_dotenv(usecwd=True), override=False)

import os
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base

DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL not set in environment or .env")

SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")


def enable_sqlite_write_locks(async_engine: AsyncEngine) -> None:
    """
    Make every SQLite transaction take the database write lock at BEGIN.

    SQLite has no row locks and the driver defers BEGIN until the first
    write, so the balance read inside a transfer would not be protected.
    BEGIN IMMEDIATE holds the write lock from the first read onwards and
    concurrent transfers queue behind it.
    """
    sync_engine = async_engine.sync_engine

    @event.listens_for(sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(url: str, **kwargs) -> AsyncEngine:
    """Create the async engine, adding write locking on SQLite."""
    async_engine = create_async_engine(url, echo=SQL_ECHO, future=True, **kwargs)
    if make_url(url).get_backend_name() == "sqlite":
        enable_sqlite_write_locks(async_engine)
    return async_engine


# Async engine
engine = build_engine(DATABASE_URL)

# Async session factory
AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False, autocommit=False
)

Base = declarative_base()


async def init_models(bind=None) -> None:
    """
    Create any missing tables for the declared models.
    """
    # models must be imported so their tables are registered on Base.metadata
    from bank_transfers.db import models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
