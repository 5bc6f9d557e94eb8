import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import JSONDocument, OwnerScopedBase


class Page(OwnerScopedBase):
    """One owner's page: a draft slot and a published slot on the same row."""

    __tablename__ = "pages"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    # owner_id inherited from OwnerScopedBase (one page per owner)
    slug: Mapped[str] = mapped_column(String(63), unique=True, nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    draft_config: Mapped[dict | None] = mapped_column(JSONDocument, nullable=True)
    published_config: Mapped[dict | None] = mapped_column(JSONDocument, nullable=True)
    theme_color: Mapped[str] = mapped_column(String(7), nullable=False, default="#000000")
    font_family: Mapped[str] = mapped_column(String(100), nullable=False, default="Inter")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), onupdate=func.now()
    )
    draft_updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    @property
    def has_published(self) -> bool:
        return self.published_config is not None
