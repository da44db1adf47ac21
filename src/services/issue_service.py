"""Issue lookups needed by link validation."""
from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.issue import Issue


async def issue_exists(db: AsyncSession, issue_id: int) -> bool:
    """Return True if an issue with this ID exists."""
    result = await db.execute(select(exists().where(Issue.id == issue_id)))
    return bool(result.scalar())
