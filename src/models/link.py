"""Link model for storing user-owned links."""
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from models.issue import Issue
    from models.user import User

URL_MAX_LENGTH = 255
TITLE_MAX_LENGTH = 255


class Link(Base, TimestampMixin):
    """Link model - a URL with a title, optional ordering position and issue."""

    __tablename__ = "links"
    __table_args__ = (
        # Listing is always scoped to one user and ordered by position
        Index("ix_links_user_id_position", "user_id", "position"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )
    issue_id: Mapped[int | None] = mapped_column(
        ForeignKey("issues.id", ondelete="SET NULL"),
        nullable=True,
    )
    url: Mapped[str] = mapped_column(String(URL_MAX_LENGTH), nullable=False)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    position: Mapped[int | None] = mapped_column(nullable=True)

    user: Mapped["User"] = relationship(back_populates="links")
    issue: Mapped["Issue | None"] = relationship(back_populates="links")
