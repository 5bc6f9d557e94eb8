"""Page configuration schema: background, sections (closed variant set), meta.

Sections are a discriminated union on ``type``. Values carrying a known tag but
an invalid payload are rejected; nothing here coerces or repairs input.
"""

import re
from typing import Annotated, Literal
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, field_validator

HEX_COLOR_RE = re.compile(r"#[0-9a-fA-F]{6}")
_URL_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*$")

MAX_SECTIONS = 20
MAX_HERO_SLIDES = 10
MAX_SOCIAL_LINKS = 10

SECTION_TYPES = ("hero", "links", "gallery", "video")
BACKGROUND_KINDS = ("color", "image")

NonEmptyStr = Annotated[str, Field(min_length=1)]
Opacity = Annotated[float, Field(ge=0, le=1)]
Gap = Literal["sm", "md", "lg"]


def is_absolute_url(value: str) -> bool:
    """True for ``scheme:rest`` URLs without whitespace (http, https, mailto, ...)."""
    if not value or any(ch.isspace() for ch in value):
        return False
    parts = urlsplit(value)
    if not parts.scheme or not _URL_SCHEME_RE.match(parts.scheme):
        return False
    if parts.scheme in ("http", "https"):
        return bool(parts.netloc)
    return bool(parts.netloc or parts.path)


class ConfigModel(BaseModel):
    """Unknown keys are stripped, known keys are validated."""

    model_config = ConfigDict(extra="ignore")


# ---------------------------------------------------------------------------
# Background
# ---------------------------------------------------------------------------


class ColorBackground(ConfigModel):
    kind: Literal["color"]
    value: str

    @field_validator("value")
    @classmethod
    def validate_hex_color(cls, v: str) -> str:
        if not HEX_COLOR_RE.fullmatch(v):
            raise ValueError("Must be a hex color in #RRGGBB format")
        return v


class ImageBackground(ConfigModel):
    kind: Literal["image"]
    value: NonEmptyStr


Background = Annotated[ColorBackground | ImageBackground, Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Hero
# ---------------------------------------------------------------------------


class HeroSlide(ConfigModel):
    src: NonEmptyStr
    alt: str | None = None
    href: str | None = None
    object_position: str | None = None


class HeroLayout(ConfigModel):
    height_vh: float | None = Field(None, ge=50, le=300)
    background_color: str | None = None
    background_opacity: Opacity | None = None


class HeroCarousel(ConfigModel):
    autoplay_interval: float | None = Field(None, ge=1, le=30)
    transition_duration: float | None = Field(None, ge=0.1, le=10)


class HeroProps(ConfigModel):
    slides: list[HeroSlide] = Field(..., max_length=MAX_HERO_SLIDES)
    title: str | None = None
    subtitle: str | None = None
    layout: HeroLayout | None = None
    carousel: HeroCarousel | None = None


# ---------------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------------


class LinkItem(ConfigModel):
    id: str
    label: NonEmptyStr
    href: str
    icon: str | None = None

    @field_validator("href")
    @classmethod
    def validate_href(cls, v: str) -> str:
        if not is_absolute_url(v):
            raise ValueError("Must be a valid absolute URL")
        return v


class LinksProps(ConfigModel):
    items: list[LinkItem]
    layout: Literal["grid", "list"] | None = None


# ---------------------------------------------------------------------------
# Gallery
# ---------------------------------------------------------------------------


class GalleryItem(ConfigModel):
    id: str
    src: NonEmptyStr
    alt: str | None = None
    caption: str | None = None
    href: str | None = None


class GalleryProps(ConfigModel):
    items: list[GalleryItem]
    columns: Literal[2, 3, 4] | None = None
    gap: Gap | None = None


# ---------------------------------------------------------------------------
# Video
# ---------------------------------------------------------------------------


class VideoItem(ConfigModel):
    id: str
    url: NonEmptyStr
    platform: Literal["youtube", "bilibili", "auto"] | None = None
    title: str | None = None
    thumbnail: str | None = None
    autoplay: StrictBool | None = None
    muted: StrictBool | None = None
    loop: StrictBool | None = None
    controls: StrictBool | None = None
    start_time: float | None = Field(None, ge=0)


class VideoLayout(ConfigModel):
    padding_y: float | None = Field(None, ge=0, le=200)
    background_color: str | None = None
    background_opacity: Opacity | None = None
    max_width: str | None = None
    aspect_ratio: Literal["16:9", "4:3", "1:1", "auto"] | None = None


class VideoDisplay(ConfigModel):
    columns: Literal[1, 2, 3] | None = None
    gap: Gap | None = None


class VideoProps(ConfigModel):
    items: list[VideoItem]
    layout: VideoLayout | None = None
    display: VideoDisplay | None = None


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


class SectionBase(ConfigModel):
    id: str
    enabled: StrictBool
    order: StrictInt = Field(..., ge=0)

    @field_validator("order", mode="before")
    @classmethod
    def integral_order(cls, v):
        # JSON has one number type; 2.0 is the integer 2
        if isinstance(v, float) and v.is_integer():
            return int(v)
        return v


class HeroSection(SectionBase):
    type: Literal["hero"]
    props: HeroProps


class LinksSection(SectionBase):
    type: Literal["links"]
    props: LinksProps


class GallerySection(SectionBase):
    type: Literal["gallery"]
    props: GalleryProps


class VideoSection(SectionBase):
    type: Literal["video"]
    props: VideoProps


AnySection = HeroSection | LinksSection | GallerySection | VideoSection

Section = Annotated[AnySection, Field(discriminator="type")]


def is_renderable(section: AnySection) -> bool:
    """Whether an enabled section produces any output."""
    if isinstance(section, VideoSection):
        return bool(section.props.items)
    if isinstance(section, HeroSection | LinksSection | GallerySection):
        return True
    raise TypeError(f"Unknown section type: {type(section).__name__}")


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------


class PageMeta(ConfigModel):
    title: str | None = None
    description: str | None = None


class PageLogo(ConfigModel):
    src: str | None = None
    alt: str | None = None
    opacity: Opacity | None = None


class SocialLink(ConfigModel):
    id: NonEmptyStr
    name: NonEmptyStr
    url: str
    icon: str | None = None
    enabled: StrictBool

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not is_absolute_url(v):
            raise ValueError("Must be a valid absolute URL")
        return v


class PageConfig(ConfigModel):
    background: Background
    sections: list[Section] = Field(..., max_length=MAX_SECTIONS)
    meta: PageMeta | None = None
    logo: PageLogo | None = None
    social_links: list[SocialLink] | None = Field(None, max_length=MAX_SOCIAL_LINKS)
    show_logo: StrictBool | None = None
    show_social_links: StrictBool | None = None
    show_hero_thumb_strip: StrictBool | None = None

    def ordered_sections(self) -> list[AnySection]:
        """Sections sorted by ``order``; ties keep their list position."""
        return sorted(self.sections, key=lambda s: s.order)

    def visible_sections(self) -> list[AnySection]:
        return [s for s in self.ordered_sections() if s.enabled and is_renderable(s)]

    def to_document(self) -> dict:
        """JSON-safe persisted shape, unset optionals omitted."""
        return self.model_dump(mode="json", exclude_none=True)
