"""Shared repository base helpers."""
from sqlalchemy.ext.asyncio import AsyncSession


class BaseRepository:
    """Base repository with common DB helpers."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _commit(self):
        """Commit the current transaction, rolling back if the commit fails."""
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
