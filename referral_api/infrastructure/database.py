from contextlib import asynccontextmanager
from typing import AsyncIterator
import logging

from sqlalchemy.exc import (
    DataError,
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    StatementError,
)
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker

from ..core import Settings
from ..core.exceptions import StoreUnavailableError, StoreConstraintViolationError

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured database"""
    options = {
        "echo": settings.DB_ECHO,
        "pool_pre_ping": True,  # Enable connection health checks
    }
    if not settings.DATABASE_URL.startswith("sqlite"):
        options["pool_size"] = settings.DB_POOL_SIZE
    return create_async_engine(settings.DATABASE_URL, **options)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the async session factory bound to ``engine``"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False
    )


@asynccontextmanager
async def translate_store_errors(operation: str) -> AsyncIterator[None]:
    """Re-raise driver errors raised inside the block as store errors.

    Connection level failures become ``StoreUnavailableError``; statements the
    database refuses become ``StoreConstraintViolationError``.
    """
    try:
        yield
    except (OperationalError, InterfaceError, DisconnectionError, OSError) as exc:
        logger.error("Store unavailable during %s: %s", operation, exc)
        raise StoreUnavailableError(str(exc), operation=operation) from exc
    except (IntegrityError, DataError, StatementError) as exc:
        logger.error("Store rejected %s: %s", operation, exc)
        raise StoreConstraintViolationError(str(exc), operation=operation) from exc
