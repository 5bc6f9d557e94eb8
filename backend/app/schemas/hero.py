"""Site-wide hero slide schemas."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from app.schemas.theme import ThemeVariables

HeroSlot = Literal[1, 2, 3]


class HeroSlideSlot(BaseModel):
    """One filled slot of the site banner. ``alt`` is never an empty string."""

    slot: HeroSlot
    src: str
    alt: str | None = None

    def to_document(self) -> dict:
        return self.model_dump(exclude_none=True)


class HeroSlideUpsert(BaseModel):
    src: str = Field(..., min_length=1)
    alt: str | None = Field(None, max_length=255)

    @field_validator("alt")
    @classmethod
    def blank_alt_to_none(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()


class HeroSlidesResponse(BaseModel):
    slides: list[HeroSlideSlot]


class HeroSlideWriteResponse(BaseModel):
    slot: HeroSlot
    slides: list[HeroSlideSlot]


class SiteHeroResponse(BaseModel):
    slides: list[HeroSlideSlot]
    theme: ThemeVariables
