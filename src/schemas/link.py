"""Pydantic schemas for link endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LinkResponse(BaseModel):
    """Schema for link responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    url: str
    title: str
    description: str | None
    position: int | None
    issue_id: int | None
    user_id: int
    created_at: datetime
    updated_at: datetime


class LinkListResponse(BaseModel):
    """Schema for paginated link list responses."""

    items: list[LinkResponse]
    total: int  # Total count of the user's links (before pagination)
    page: int  # Current page, 1-based
    per_page: int  # Fixed page size
    last_page: int  # Last page number (1 when there are no links)
    has_more: bool  # True if there are more results beyond this page


class LinkFieldError(BaseModel):
    """A single failed validation rule for one field."""

    code: str = Field(description="Stable error code, e.g. 'url.required'")
    message: str = Field(description="Human-readable error message")


class LinkValidationErrorDetail(BaseModel):
    """Body of the `detail` key for 422 responses from link create/update."""

    message: str = "Link validation failed"
    errors: dict[str, list[LinkFieldError]] = Field(
        description="Map of field name to every rule that field failed",
    )
