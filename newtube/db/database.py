"""Engine construction and request-scoped sessions.

Postgres (asyncpg) is the production store. SQLite (aiosqlite) is accepted so
the test suite can run the same queries in memory; foreign keys are switched
on per connection there, otherwise cascade deletes would not fire.
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

from newtube.config import Settings, get_settings

settings = get_settings()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _engine_options(url: str, config: Settings) -> dict[str, Any]:
    if make_url(url).get_backend_name() == "sqlite":
        return {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    return {
        "pool_pre_ping": True,
        "pool_size": config.db_pool_size,
        "max_overflow": config.db_max_overflow,
        "pool_timeout": 30,
        "pool_recycle": 1800,
        "connect_args": {
            "server_settings": {
                "application_name": config.app_name.lower(),
                "statement_timeout": str(config.db_statement_timeout_ms),
                "timezone": "UTC",
            },
        },
    }


def build_engine(url: str, config: Settings | None = None) -> AsyncEngine:
    """Create an async engine tuned for the backend named in ``url``."""
    config = config or settings
    engine = create_async_engine(url, echo=config.db_echo, **_engine_options(url, config))
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def build_session_maker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine = build_engine(settings.database_url_async)
async_session_maker = build_session_maker(engine)


async def init_db() -> None:
    """Create missing tables. Production schemas are managed by Alembic."""
    from newtube.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting database session."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
