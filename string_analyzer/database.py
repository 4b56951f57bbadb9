"""
String Analyzer Service - Database Engine Helpers
=================================================

What:  Async SQLAlchemy engine and session factory for the sql backend.
How:   The engine is created on demand by SqlBackend, so the json backend
       (the default) never imports a database driver.
Who:   Used by services.backends.SqlBackend and models.string_row.

SQLite URLs get `check_same_thread=False`; other URLs get pre-ping and
hourly connection recycling.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Build an async engine for `database_url`."""
    if database_url.startswith("sqlite"):
        return create_async_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_recycle=3600,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: rows are read after the transaction closes
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
