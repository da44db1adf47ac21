"""Readiness check for the database and the links table."""
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import Executable

from db.session import get_async_session
from models.link import Link


logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="'healthy' when every check passed, else 'degraded'")
    database: str = Field(description="'healthy' or 'unhealthy'")
    link_store: str = Field(
        description="'ready' when the links table can be read, else 'unavailable'",
    )


async def _passes(db: AsyncSession, statement: Executable, failure: str) -> bool:
    try:
        await db.execute(statement)
    except Exception:
        logger.exception(failure)
        # Leave the session usable for the commit at request end
        await db.rollback()
        return False
    return True


@router.get("/health", response_model=HealthResponse)
async def health_check(
    db: AsyncSession = Depends(get_async_session),
) -> HealthResponse:
    """
    Check that the database answers and that links can be read from it.

    A reachable database without the links table (migrations not applied)
    reports `database: healthy` with `link_store: unavailable`.
    """
    database_ok = await _passes(db, text("SELECT 1"), "Database health check failed")
    store_ready = database_ok and await _passes(
        db, select(Link.id).limit(1), "Links table is not readable",
    )

    return HealthResponse(
        status="healthy" if store_ready else "degraded",
        database="healthy" if database_ok else "unhealthy",
        link_store="ready" if store_ready else "unavailable",
    )
