"""
Database connection management.

Builds async SQLAlchemy engines and session factories. The application
constructs its engine once at startup; get_async_engine() serves scripts.

Dependencies: sqlalchemy, agentdoc.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from agentdoc.configs import get_settings
from agentdoc.configs.database import DatabaseSettings


def build_async_engine(db_config: DatabaseSettings) -> AsyncEngine:
    """
    Create an async engine for the given database settings.

    Pool sizing applies to server databases only; SQLite URLs use the
    dialect's default pool. pool_pre_ping detects stale connections.

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Usage:
        engine = build_async_engine(get_settings().database)
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    if db_config.is_sqlite:
        return create_async_engine(db_config.async_database_url, echo=db_config.echo_sql)

    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


@lru_cache
def get_async_engine() -> AsyncEngine:
    """Process-wide engine built from the cached settings."""
    return build_async_engine(get_settings().database)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Bind a session factory to an engine.

    autoflush=False and expire_on_commit=False keep transaction control
    explicit and let committed rows be read after the session closes.
    """
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )

