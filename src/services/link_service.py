"""Service layer for link CRUD operations."""
import logging
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from functools import partial
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.base import INTEGER_MAX
from models.link import Link
from models.user import User
from services import issue_service, link_policy
from services.exceptions import LinkForbiddenError, LinkNotFoundError, LinkValidationError
from services.link_validator import validate_link_fields

logger = logging.getLogger(__name__)

LINKS_PER_PAGE = 10


@dataclass
class LinkPage:
    """One page of a user's links plus pagination metadata."""

    items: list[Link]
    total: int
    page: int
    per_page: int = LINKS_PER_PAGE

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))

    @property
    def has_more(self) -> bool:
        return self.page * self.per_page < self.total


async def list_links(
    db: AsyncSession,
    user: User,
    page: int = 1,
) -> LinkPage:
    """
    Get one page of the user's links ordered by position.

    Links without a position sort after positioned ones; ties (including
    missing positions) fall back to creation order via the primary key.
    """
    if page < 1:
        raise ValueError(f"Page must be >= 1, got {page}")

    base_query = select(Link).where(Link.user_id == user.id)

    count_query = select(func.count()).select_from(base_query.subquery())
    total_result = await db.execute(count_query)
    total = total_result.scalar() or 0

    result = await db.execute(
        base_query
        .order_by(Link.position.asc().nulls_last(), Link.id.asc())
        .offset((page - 1) * LINKS_PER_PAGE)
        .limit(LINKS_PER_PAGE),
    )
    return LinkPage(items=list(result.scalars().all()), total=total, page=page)


async def _validate(db: AsyncSession, data: Mapping[str, Any]) -> dict[str, Any]:
    """Validate raw fields, raising LinkValidationError with every field error found."""
    validation = await validate_link_fields(data, partial(issue_service.issue_exists, db))
    if not validation.ok:
        raise LinkValidationError(validation.errors)
    return validation.fields


async def create_link(
    db: AsyncSession,
    user: User,
    data: Mapping[str, Any],
) -> Link:
    """
    Create a new link owned by `user`.

    Any owner supplied in `data` is ignored; the link always belongs to the
    acting user. Nothing is written if validation fails.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    fields = await _validate(db, data)

    link = Link(**fields)
    link.user_id = user.id
    db.add(link)
    await db.flush()
    await db.refresh(link)
    logger.info("User %s created link %s", user.id, link.id)
    return link


async def _get_authorized_link(
    db: AsyncSession,
    user: User,
    link_id: int,
    check: Callable[[User, Link], bool],
) -> Link:
    # No row can carry an id outside the column range
    if not 1 <= link_id <= INTEGER_MAX:
        raise LinkNotFoundError(link_id)
    link = await db.get(Link, link_id)
    if link is None:
        raise LinkNotFoundError(link_id)
    if not check(user, link):
        logger.warning(
            "User %s denied %s on link %s owned by user %s",
            user.id,
            check.__name__,
            link_id,
            link.user_id,
        )
        raise LinkForbiddenError(link_id)
    return link


async def get_link(db: AsyncSession, user: User, link_id: int) -> Link:
    """Get a link the user may view. Raises LinkNotFoundError or LinkForbiddenError."""
    return await _get_authorized_link(db, user, link_id, link_policy.can_view)


async def get_link_for_edit(db: AsyncSession, user: User, link_id: int) -> Link:
    """Get a link the user may edit. Raises LinkNotFoundError or LinkForbiddenError."""
    return await _get_authorized_link(db, user, link_id, link_policy.can_edit)


async def update_link(
    db: AsyncSession,
    user: User,
    link_id: int,
    data: Mapping[str, Any],
) -> Link:
    """
    Update a link with validated fields.

    Existence and ownership are checked before validation, so a foreign link
    reports forbidden even when the payload is invalid. The owner never changes.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    link = await _get_authorized_link(db, user, link_id, link_policy.can_edit)
    fields = await _validate(db, data)

    for field, value in fields.items():
        setattr(link, field, value)

    await db.flush()
    await db.refresh(link)
    return link


async def delete_link(db: AsyncSession, user: User, link_id: int) -> None:
    """
    Permanently delete a link.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    link = await _get_authorized_link(db, user, link_id, link_policy.can_delete)
    await db.delete(link)
    await db.flush()
    logger.info("User %s deleted link %s", user.id, link_id)
