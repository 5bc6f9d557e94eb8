"""Theme request/response schemas."""

from pydantic import BaseModel, Field, field_validator

from app.schemas.page_config import HEX_COLOR_RE


class ThemeVariables(BaseModel):
    """Presentation variables derived from one accent color.

    ``foreground`` is None when the accent is not a ``#RRGGBB`` string; in that
    case ``hover`` and ``active`` repeat the accent unchanged.
    """

    accent: str
    hover: str
    active: str
    foreground: str | None = None


class ThemeUpdate(BaseModel):
    """PUT body. All fields optional (patch semantics)."""

    theme_color: str | None = Field(None, max_length=7)
    font_family: str | None = Field(None, min_length=1, max_length=100)

    @field_validator("theme_color")
    @classmethod
    def validate_hex_color(cls, v: str | None) -> str | None:
        if v is not None and not HEX_COLOR_RE.fullmatch(v):
            raise ValueError("Must be a hex color in #RRGGBB format")
        return v
