"""Link CRUD endpoints."""
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.user import User
from schemas.link import (
    LinkFieldError,
    LinkListResponse,
    LinkResponse,
    LinkValidationErrorDetail,
)
from services import link_service
from services.exceptions import LinkForbiddenError, LinkNotFoundError, LinkValidationError

router = APIRouter(prefix="/links", tags=["links"])

LINK_BODY_EXAMPLE = {
    "url": "https://example.com",
    "title": "Example",
    "description": "Optional description",
    "issue_id": None,
    "position": 1,
}


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Link not found")


def _forbidden() -> HTTPException:
    return HTTPException(status_code=403, detail="Not allowed to access this link")


def _validation_failed(exc: LinkValidationError) -> HTTPException:
    detail = LinkValidationErrorDetail(
        errors={
            field: [LinkFieldError(code=e.code, message=e.message) for e in errors]
            for field, errors in exc.errors.items()
        },
    )
    return HTTPException(status_code=422, detail=detail.model_dump())


@router.get("/", response_model=LinkListResponse)
async def list_links(
    page: int = Query(default=1, ge=1, description="Page number (10 links per page)"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> LinkListResponse:
    """List the current user's links ordered by position."""
    link_page = await link_service.list_links(db, current_user, page)
    return LinkListResponse(
        items=[LinkResponse.model_validate(link) for link in link_page.items],
        total=link_page.total,
        page=link_page.page,
        per_page=link_page.per_page,
        last_page=link_page.last_page,
        has_more=link_page.has_more,
    )


@router.post("/", response_model=LinkResponse, status_code=201)
async def create_link(
    data: dict[str, Any] = Body(examples=[LINK_BODY_EXAMPLE]),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> LinkResponse:
    """
    Create a new link owned by the current user.

    - **url**: required absolute URL, at most 255 characters
    - **title**: required, at most 255 characters
    - **description**: optional
    - **issue_id**: optional, must reference an existing issue
    - **position**: optional integer >= 0

    Any `user_id` in the body is ignored.
    """
    try:
        link = await link_service.create_link(db, current_user, data)
    except LinkValidationError as e:
        raise _validation_failed(e)
    return LinkResponse.model_validate(link)


@router.get("/{link_id}", response_model=LinkResponse)
async def get_link(
    link_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> LinkResponse:
    """Get a single link by ID."""
    try:
        link = await link_service.get_link(db, current_user, link_id)
    except LinkNotFoundError:
        raise _not_found()
    except LinkForbiddenError:
        raise _forbidden()
    return LinkResponse.model_validate(link)


@router.get("/{link_id}/edit", response_model=LinkResponse)
async def edit_link(
    link_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> LinkResponse:
    """Get a link for editing. Only the owner may edit."""
    try:
        link = await link_service.get_link_for_edit(db, current_user, link_id)
    except LinkNotFoundError:
        raise _not_found()
    except LinkForbiddenError:
        raise _forbidden()
    return LinkResponse.model_validate(link)


@router.put("/{link_id}", response_model=LinkResponse)
async def update_link(
    link_id: int,
    data: dict[str, Any] = Body(examples=[LINK_BODY_EXAMPLE]),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> LinkResponse:
    """
    Update a link. Same field rules as create.

    Optional fields left out of the body keep their stored values. The owner
    cannot be changed.
    """
    try:
        link = await link_service.update_link(db, current_user, link_id, data)
    except LinkNotFoundError:
        raise _not_found()
    except LinkForbiddenError:
        raise _forbidden()
    except LinkValidationError as e:
        raise _validation_failed(e)
    return LinkResponse.model_validate(link)


@router.delete("/{link_id}", status_code=204)
async def delete_link(
    link_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Permanently delete a link."""
    try:
        await link_service.delete_link(db, current_user, link_id)
    except LinkNotFoundError:
        raise _not_found()
    except LinkForbiddenError:
        raise _forbidden()
