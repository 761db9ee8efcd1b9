"""
Cookbook Backend: Database Engine & Session Management
=======================================================

What:  Async SQLAlchemy engine factory, session factory and the per-request
       session dependency.
How:   The lifespan handler in main.py builds the engine and session factory
       and stores them on `app.state`. `get_db_session` opens one session per
       request, commits on success and rolls back on error.
Who:   `routes.deps.get_store` wraps the yielded session in a DocumentStore.

Nothing here is created at import time; tests build their own engine
(in-memory SQLite) and override `get_db_session`.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from cookbook.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Shares one metadata object, which Alembic reads for migrations and the
    test suite uses for `create_all`.
    """
    pass


def build_engine(config: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured database URL.

    Pool options are only passed for server databases; SQLite drivers use
    their own pool classes that reject `pool_size`/`max_overflow`.
    """
    options = {"echo": config.log_level == "DEBUG"}
    if not config.is_sqlite:
        options.update(
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_pre_ping=config.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(config.database_url, **options)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: response models are built from ORM objects
    # after the dependency has committed
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory on `app.state`
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handler
        5. Always: closes the session (returns connection to pool)
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
