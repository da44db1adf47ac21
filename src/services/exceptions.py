"""Shared exceptions for service layer operations."""
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from services.link_validator import FieldError


class LinkNotFoundError(Exception):
    """Raised when a link ID does not exist."""

    def __init__(self, link_id: int) -> None:
        self.link_id = link_id
        super().__init__(f"Link not found: {link_id}")


class LinkForbiddenError(Exception):
    """
    Raised when a link exists but the acting user may not access it.

    Kept separate from LinkNotFoundError so the HTTP layer can answer 403
    for foreign links and 404 for absent ones.
    """

    def __init__(self, link_id: int) -> None:
        self.link_id = link_id
        super().__init__(f"Not allowed to access link: {link_id}")


class LinkValidationError(Exception):
    """Raised by the link service when submitted fields fail validation."""

    def __init__(self, errors: dict[str, list["FieldError"]]) -> None:
        self.errors = errors
        super().__init__(f"Invalid link fields: {', '.join(sorted(errors))}")
