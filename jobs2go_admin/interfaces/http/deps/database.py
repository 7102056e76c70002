"""Database session dependency."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from jobs2go_admin.infrastructure.database.session import get_session_factory


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """One session per request, committed when the handler returns normally."""
    factory = get_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


__all__ = ["get_db_session"]
