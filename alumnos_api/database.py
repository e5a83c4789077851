"""
Alumnos API: Database Engine & Session Management
=================================================

What:  Async SQLAlchemy engine and session factory built from a StoreConfig.
Why:   Keeps driver and pool configuration in one place; the repository only
       asks for a session factory.
How:   `create_engine_for()` returns a pooled async engine; sessions created
       from `create_session_factory()` are opened per repository call and
       returned to the pool when the call's scope exits.

Connection Pooling Strategy:
    pool_size=5:       Persistent connections reused across requests
    max_overflow=10:   Temporary connections for bursts
    pool_pre_ping:     Detects connections the MySQL server dropped (wait_timeout)
    pool_recycle=3600: Recycles connections every hour

    Each request still sees "acquire → execute → release"; the pool only
    avoids reconnecting for every statement.
"""

import logging

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from alumnos_api.config import StoreConfig

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Its metadata describes the DALUMN table; the test suite uses it to
    create the schema in a throwaway SQLite file.
    """
    pass


def create_engine_for(config: StoreConfig) -> AsyncEngine:
    """
    Create a pooled async engine for the given store configuration.

    No connection is opened here; the first statement checks one out.
    """
    url = config.sqlalchemy_url()
    engine = create_async_engine(
        url,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        pool_pre_ping=config.pool_pre_ping,
        pool_recycle=config.pool_recycle,
        echo=config.echo,
    )
    logger.info("Database engine created for %s", engine.url.render_as_string(hide_password=True))
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: rows stay readable after the scope commits
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
