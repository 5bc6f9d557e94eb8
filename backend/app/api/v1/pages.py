"""Owner page endpoints: ensure page, draft GET/PUT, theme, publish.

Every route is scoped to the authenticated user's own page; there is no way to
address another owner's page from here.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_current_user, get_db
from app.models.user import User
from app.schemas.common import ErrorResponse
from app.schemas.page import (
    DraftResponse,
    DraftUpdate,
    PageCreate,
    PageResponse,
    PublishResponse,
    ThemeResponse,
)
from app.schemas.theme import ThemeUpdate
from app.services import page_lifecycle
from app.services.theme import derive_theme

router = APIRouter()

PROBLEM = {"model": ErrorResponse}


@router.post("", response_model=PageResponse, status_code=201, responses={409: PROBLEM})
async def ensure_my_page(
    body: PageCreate,
    response: Response,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create the current user's page. Idempotent: returns 200 with the existing page."""
    page, created = await page_lifecycle.ensure_page(
        db, user.id, body.slug, display_name=body.display_name
    )
    if not created:
        response.status_code = 200
    return page


@router.get("", response_model=PageResponse)
async def get_my_page(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await page_lifecycle.get_page(db, user.id)


@router.get("/draft", response_model=DraftResponse)
async def get_my_draft(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DraftResponse:
    draft, saved_at = await page_lifecycle.get_draft(db, user.id)
    return DraftResponse(draft_config=draft, draft_updated_at=saved_at)


@router.put("/draft", response_model=DraftResponse, responses={404: PROBLEM, 422: PROBLEM})
async def save_my_draft(
    body: DraftUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DraftResponse:
    """Validate and store the draft. Pass ``slug`` to create the page on first save."""
    page = await page_lifecycle.save_draft(db, user.id, body.draft_config, slug=body.slug)
    return DraftResponse(draft_config=page.draft_config, draft_updated_at=page.draft_updated_at)


@router.put("/theme", response_model=ThemeResponse)
async def update_my_theme(
    body: ThemeUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> ThemeResponse:
    updates = body.model_dump(exclude_unset=True, exclude_none=True)
    page = await page_lifecycle.update_theme(db, user.id, **updates)
    return ThemeResponse(
        theme_color=page.theme_color,
        font_family=page.font_family,
        theme=derive_theme(page.theme_color),
    )


@router.post("/publish", response_model=PublishResponse, responses={409: PROBLEM, 422: PROBLEM})
async def publish_my_page(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> PublishResponse:
    """Copy the current draft into the published slot. No body."""
    page = await page_lifecycle.publish(db, user.id)
    return PublishResponse(published_config=page.published_config, published_at=page.published_at)
