"""Page request/response schemas."""

import re
import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.schemas.theme import ThemeVariables

SLUG_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]{1,61}[a-z0-9]$")
SLUG_MESSAGE = (
    "Slug must be 3-63 chars, lowercase alphanumeric with hyphens, "
    "cannot start or end with a hyphen"
)


class PageCreate(BaseModel):
    slug: str = Field(..., min_length=3, max_length=63)
    display_name: str | None = Field(None, min_length=1, max_length=255)

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str) -> str:
        if not SLUG_PATTERN.match(v):
            raise ValueError(SLUG_MESSAGE)
        return v


class DraftUpdate(BaseModel):
    """PUT body. ``draft_config`` is validated by the page validator, not here,
    so every violation is reported with its path."""

    draft_config: dict
    slug: str | None = Field(None, min_length=3, max_length=63)

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str | None) -> str | None:
        if v is not None and not SLUG_PATTERN.match(v):
            raise ValueError(SLUG_MESSAGE)
        return v


class PageResponse(BaseModel):
    id: uuid.UUID
    slug: str
    display_name: str | None = None
    draft_config: dict | None = None
    published_config: dict | None = None
    has_published: bool
    theme_color: str
    font_family: str
    created_at: datetime
    updated_at: datetime | None = None
    draft_updated_at: datetime | None = None
    published_at: datetime | None = None

    model_config = {"from_attributes": True}


class DraftResponse(BaseModel):
    draft_config: dict
    draft_updated_at: datetime | None = None


class PublishResponse(BaseModel):
    published_config: dict
    published_at: datetime


class ThemeResponse(BaseModel):
    theme_color: str
    font_family: str
    theme: ThemeVariables


class PublicPageResponse(BaseModel):
    """Anonymous view of a page (no owner id, no draft)."""

    slug: str
    display_name: str | None = None
    config: dict
    sections: list[dict]
    theme: ThemeVariables
    font_family: str
