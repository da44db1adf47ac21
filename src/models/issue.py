"""Issue model. Issues are managed elsewhere; links may point at one."""
from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from models.link import Link


class Issue(Base, TimestampMixin):
    """Issue model - only its identity matters to links."""

    __tablename__ = "issues"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)

    links: Mapped[list["Link"]] = relationship(back_populates="issue")
