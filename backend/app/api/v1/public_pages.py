"""Public read-only page endpoint (anonymous, addressed by slug).

Only the published configuration is exposed. A page that has never been
published renders the default configuration; absence is not an error.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db
from app.schemas.page import PublicPageResponse
from app.services.page_lifecycle import get_published_by_slug
from app.services.theme import derive_theme

router = APIRouter()


@router.get("/{slug}", response_model=PublicPageResponse)
async def get_public_page(
    slug: str,
    db: AsyncSession = Depends(get_db),
) -> PublicPageResponse:
    """Return the published page with its render-ordered visible sections and theme."""
    page, config = await get_published_by_slug(db, slug)

    return PublicPageResponse(
        slug=page.slug,
        display_name=page.display_name,
        config=config.to_document(),
        sections=[s.model_dump(mode="json", exclude_none=True) for s in config.visible_sections()],
        theme=derive_theme(page.theme_color),
        font_family=page.font_family,
    )
