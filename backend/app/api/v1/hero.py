"""Site-wide hero banner endpoints.

GET    /site/hero                  public, always three slides
GET    /admin/hero/slides          stored slides (0-3)
PUT    /admin/hero/slides/{slot}   upsert one slot
DELETE /admin/hero/slides/{slot}   clear one slot
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.dependencies import get_db, require_admin
from app.models.user import User
from app.schemas.hero import (
    HeroSlidesResponse,
    HeroSlideUpsert,
    HeroSlideWriteResponse,
    SiteHeroResponse,
)
from app.services.hero_slides import (
    delete_hero_slide,
    fill_slides_with_defaults,
    get_site_hero_slides,
    upsert_hero_slide,
)
from app.services.theme import derive_theme

public_router = APIRouter()
admin_router = APIRouter()

SlotParam = Annotated[int, Path(ge=1, le=3, description="Hero slot (1, 2 or 3)")]


@public_router.get("/hero", response_model=SiteHeroResponse)
async def get_site_hero(db: AsyncSession = Depends(get_db)) -> SiteHeroResponse:
    slides = await get_site_hero_slides(db)
    return SiteHeroResponse(
        slides=fill_slides_with_defaults(slides),
        theme=derive_theme(settings.SITE_THEME_COLOR),
    )


@admin_router.get("/slides", response_model=HeroSlidesResponse)
async def list_hero_slides(
    _admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> HeroSlidesResponse:
    return HeroSlidesResponse(slides=await get_site_hero_slides(db))


@admin_router.put("/slides/{slot}", response_model=HeroSlideWriteResponse)
async def put_hero_slide(
    slot: SlotParam,
    body: HeroSlideUpsert,
    _admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> HeroSlideWriteResponse:
    slides = await upsert_hero_slide(db, slot, body.src, body.alt)
    return HeroSlideWriteResponse(slot=slot, slides=slides)


@admin_router.delete("/slides/{slot}", response_model=HeroSlideWriteResponse)
async def remove_hero_slide(
    slot: SlotParam,
    _admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> HeroSlideWriteResponse:
    slides = await delete_hero_slide(db, slot)
    return HeroSlideWriteResponse(slot=slot, slides=slides)
