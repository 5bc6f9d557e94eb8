"""Site-wide hero slides: normalization of stored data + singleton row CRUD.

Stored slides are loosely typed JSON. ``normalize_slides`` canonicalizes them
into at most one slide per slot (1-3), ``fill_slides_with_defaults`` pads the
result to exactly three for display. Neither ever raises.

Precedence: when a slot repeats, the entry later in stored order wins. Writes
always persist the normalized list, so stored order is slot order afterwards.
"""

import logging
import math
from collections.abc import Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.site_config import SITE_CONFIG_KEY, SiteConfig
from app.schemas.hero import HeroSlideSlot

logger = logging.getLogger(__name__)

HERO_SLOTS = (1, 2, 3)

DEFAULT_HERO_SLIDES: tuple[HeroSlideSlot, ...] = (
    HeroSlideSlot(slot=1, src="/hero/1.jpeg", alt="hero 1"),
    HeroSlideSlot(slot=2, src="/hero/2.jpeg", alt="hero 2"),
    HeroSlideSlot(slot=3, src="/hero/3.jpeg", alt="hero 3"),
)


def _coerce_slot(value: Any) -> int | None:
    """Return 1, 2 or 3 for values that denote exactly that slot, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value in HERO_SLOTS else None
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number) or not number.is_integer():
        return None
    slot = int(number)
    return slot if slot in HERO_SLOTS else None


def _parse_slide(item: Any) -> HeroSlideSlot | None:
    if isinstance(item, HeroSlideSlot):
        item = item.to_document()
    if not isinstance(item, Mapping):
        return None

    slot = _coerce_slot(item.get("slot"))
    src = item.get("src")
    if slot is None or not isinstance(src, str) or not src:
        return None

    alt = item.get("alt")
    alt = alt.strip() if isinstance(alt, str) and alt.strip() else None
    return HeroSlideSlot(slot=slot, src=src, alt=alt)


def normalize_slides(raw: Any) -> list[HeroSlideSlot]:
    """Canonical hero slides: valid entries only, last one per slot, ascending slot."""
    if not isinstance(raw, list | tuple):
        return []

    by_slot: dict[int, HeroSlideSlot] = {}
    for item in raw:
        slide = _parse_slide(item)
        if slide is not None:
            by_slot[slide.slot] = slide

    return [by_slot[slot] for slot in HERO_SLOTS if slot in by_slot]


def fill_slides_with_defaults(slides: list[HeroSlideSlot]) -> list[HeroSlideSlot]:
    """Exactly three slides, built-in defaults substituted for missing slots."""
    by_slot = {slide.slot: slide for slide in slides}
    return [by_slot.get(slot, DEFAULT_HERO_SLIDES[slot - 1]) for slot in HERO_SLOTS]


# ---------------------------------------------------------------------------
# Singleton row access
# ---------------------------------------------------------------------------


async def _load_site_config(db: AsyncSession, *, for_update: bool = False) -> SiteConfig | None:
    stmt = select(SiteConfig).where(SiteConfig.key == SITE_CONFIG_KEY)
    if for_update:
        stmt = stmt.with_for_update()
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def _get_or_create_site_config(db: AsyncSession) -> SiteConfig:
    config = await _load_site_config(db, for_update=True)
    if config is None:
        config = SiteConfig(key=SITE_CONFIG_KEY, hero_slides=[])
        db.add(config)
        await db.flush()
    return config


async def get_site_hero_slides(db: AsyncSession) -> list[HeroSlideSlot]:
    """Normalized stored slides (0-3 entries)."""
    config = await _load_site_config(db)
    return normalize_slides(config.hero_slides if config else None)


async def upsert_hero_slide(
    db: AsyncSession,
    slot: int,
    src: str,
    alt: str | None = None,
) -> list[HeroSlideSlot]:
    """Replace the slide in ``slot`` and return the re-normalized list."""
    config = await _get_or_create_site_config(db)
    current = [s for s in normalize_slides(config.hero_slides) if s.slot != slot]
    updated = normalize_slides([*current, {"slot": slot, "src": src, "alt": alt}])

    config.hero_slides = [s.to_document() for s in updated]
    await db.flush()
    logger.info("Hero slot %s set to %s", slot, src)
    return updated


async def delete_hero_slide(db: AsyncSession, slot: int) -> list[HeroSlideSlot]:
    """Clear ``slot`` (no-op if empty) and return the remaining slides."""
    config = await _get_or_create_site_config(db)
    updated = [s for s in normalize_slides(config.hero_slides) if s.slot != slot]

    config.hero_slides = [s.to_document() for s in updated]
    await db.flush()
    logger.info("Hero slot %s cleared", slot)
    return updated
