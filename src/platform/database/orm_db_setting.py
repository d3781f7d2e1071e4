"""
SQLAlchemy async engine and session management (SQLite via aiosqlite)

This module provides:
1. AsyncEngineManager: owns the engine and session maker, applies SQLite pragmas
2. Base: declarative base shared by all ORM models
3. create_db_and_tables: schema initialization ("create if absent")
4. Database class (for dependency injection)

Connections are not pooled (NullPool). Every session opens its own aiosqlite
connection on the running event loop and closes it on exit, so the engine is
safe to share between the server loop, test loops and setup scripts.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator, Optional

from sqlalchemy import event
from sqlalchemy.engine.url import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


# =============================================================================
# Engine Manager
# =============================================================================


class AsyncEngineManager:
    """
    Lazily creates the async engine for `settings.DATABASE_URL`.

    Every new DBAPI connection gets:
    - journal_mode=WAL: readers never block the single writer
    - busy_timeout: concurrent writers wait instead of failing with "database is locked"
    - foreign_keys=ON
    """

    def __init__(self, database_url: Optional[str] = None) -> None:
        self._database_url = database_url
        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def database_url(self) -> str:
        return self._database_url or settings.DATABASE_URL

    def get_engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                self.get_engine(),
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_maker

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_maker = None

    def _create_engine(self) -> AsyncEngine:
        url = make_url(self.database_url)
        if url.database and url.database != ':memory:':
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        engine = create_async_engine(
            url,
            echo=settings.DB_ECHO,
            poolclass=NullPool,
            connect_args={'timeout': settings.DB_BUSY_TIMEOUT_SECONDS},
        )
        busy_timeout_ms = int(settings.DB_BUSY_TIMEOUT_SECONDS * 1000)

        @event.listens_for(engine.sync_engine, 'connect')
        def _set_sqlite_pragma(dbapi_connection: Any, connection_record: Any) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute('PRAGMA journal_mode=WAL')
            cursor.execute(f'PRAGMA busy_timeout={busy_timeout_ms}')
            cursor.execute('PRAGMA foreign_keys=ON')
            cursor.close()

        Logger.base.info(f'🔗 [DB] Engine created for {url.render_as_string(hide_password=True)}')
        return engine


# Global engine manager
_engine_manager = AsyncEngineManager()


def get_engine() -> AsyncEngine:
    return _engine_manager.get_engine()


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    return _engine_manager.get_session_maker()


async def dispose_engine() -> None:
    await _engine_manager.dispose()


# =============================================================================
# Base Model
# =============================================================================


class Base(DeclarativeBase):
    pass


# =============================================================================
# Table Creation
# =============================================================================


async def create_db_and_tables() -> None:
    """Create database tables if they don't exist"""
    # Register models on Base.metadata
    import src.service.ticketing.driven_adapter.model  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    Logger.base.info('🗄️  [DB] Tables ensured')


async def drop_db_and_tables() -> None:
    import src.service.ticketing.driven_adapter.model  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.drop_all, checkfirst=True)
    Logger.base.info('🧹 [DB] Tables dropped')


# =============================================================================
# Database Class (for DI)
# =============================================================================


class Database:
    """Hands out sessions from the global engine manager"""

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for database sessions

        Note: Automatically rolls back an open transaction on exception
        """
        async with get_session_maker()() as session:
            yield session
