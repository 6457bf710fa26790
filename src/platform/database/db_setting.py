"""
SQLAlchemy async engine and session management

AsyncEngineManager keeps one engine per running event loop. Test clients and
CLI tools start their own loops, and an engine whose pooled connections belong
to a dead loop fails with "attached to a different loop".

PostgreSQL (asyncpg) is the production target. SQLite (aiosqlite) is accepted
for local runs and tests; its connections get a busy timeout so concurrent
writers queue on the database lock instead of failing immediately.
"""

import asyncio
from typing import Any, Optional

from sqlalchemy import event
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


class AsyncEngineManager:
    def __init__(self, database_url: str | None = None) -> None:
        self._database_url = database_url
        self._engine: Optional[AsyncEngine] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def database_url(self) -> str:
        return self._database_url or settings.DATABASE_URL_ASYNC

    def get_engine(self) -> AsyncEngine:
        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            if self._engine is None:
                self._engine = self._create_engine()
            return self._engine

        if self._loop is not current_loop or self._engine is None:
            if self._engine is not None:
                Logger.base.warning('🔄 [DB] Event loop changed, replacing engine')
            Logger.base.info(f'🔗 [DB] Creating engine for event loop {id(current_loop)}')
            self._engine = self._create_engine()
            self._session_maker = None
            self._loop = current_loop
        return self._engine

    def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        engine = self.get_engine()
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_maker

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_maker = None
        self._loop = None

    def _create_engine(self) -> AsyncEngine:
        url = self.database_url
        if url.startswith('sqlite'):
            engine = create_async_engine(
                url,
                echo=False,
                poolclass=NullPool,
                connect_args={'timeout': settings.SQLITE_BUSY_TIMEOUT},
            )
            event.listen(engine.sync_engine, 'connect', _enable_sqlite_foreign_keys)
            return engine

        return create_async_engine(
            url,
            echo=False,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_POOL_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=settings.DB_POOL_PRE_PING,
        )


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA foreign_keys=ON')
    cursor.close()


_engine_manager = AsyncEngineManager()


def get_engine() -> AsyncEngine:
    return _engine_manager.get_engine()


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    return _engine_manager.get_session_maker()


class Base(DeclarativeBase):
    pass


async def create_db_and_tables(engine: AsyncEngine | None = None) -> None:
    """Create tables if they don't exist (local runs and tests; production uses Alembic)"""
    # Models register themselves on Base.metadata when imported
    import src.service.box_office.driven_adapter.model  # noqa: F401

    async with (engine or get_engine()).begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)


class Database:
    """Session factory handed to repositories and units of work by the DI container"""

    def __init__(self, engine_manager: AsyncEngineManager | None = None) -> None:
        self._engine_manager = engine_manager or _engine_manager

    @property
    def session_maker(self) -> async_sessionmaker[AsyncSession]:
        return self._engine_manager.get_session_maker()

    async def dispose(self) -> None:
        await self._engine_manager.dispose()
