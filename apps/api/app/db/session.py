"""Database engine, session dependency and schema helper."""
from __future__ import annotations

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ..core.config import settings
from ..models import Base

# asyncpg gives up connecting after the read budget so catalog reads can fall back
connect_args: dict[str, object] = {"timeout": settings.store_read_timeout_seconds}
if settings.database_ssl_required:
    connect_args["ssl"] = True

engine = create_async_engine(
    settings.database_async_url,
    echo=False,
    pool_pre_ping=True,
    pool_timeout=settings.store_read_timeout_seconds,
    connect_args=connect_args,
)
SessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency to provide an async session."""

    async with SessionLocal() as session:
        yield session


async def create_schema() -> None:
    """Create marketplace tables that do not exist yet."""

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
