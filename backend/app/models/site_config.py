from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, JSONDocument

SITE_CONFIG_KEY = "default"


class SiteConfig(Base):
    """Site-wide settings. A single well-known row keyed by SITE_CONFIG_KEY."""

    __tablename__ = "site_config"

    key: Mapped[str] = mapped_column(String(32), primary_key=True, default=SITE_CONFIG_KEY)
    # [{slot, src, alt?}], 0-3 entries sorted by slot
    hero_slides: Mapped[list] = mapped_column(JSONDocument, nullable=False, default=list)
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
