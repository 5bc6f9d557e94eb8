"""Draft/publish lifecycle for owner pages.

Each owner has at most one ``pages`` row holding two slots:

    NoPage --ensure_page / save_draft(slug=...)--> HasDraftOnly --publish--> HasDraftAndPublished

The draft slot only ever receives validated configurations. The published slot
changes only through ``publish``, which copies the (re-validated) draft verbatim.
Callers pass an already-authenticated owner id; every query is scoped by it.
All writes flush into the caller's transaction; ``get_db`` commits or rolls back
the whole request, so a failure never leaves a half-written slot behind.
"""

import copy
import logging
import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import InvalidConfigError, NoDraftError, NotFoundError, SlugTakenError
from app.models.page import Page
from app.schemas.page_config import PageConfig
from app.services.page_defaults import DEFAULT_PAGE_CONFIG, empty_config_document
from app.services.page_validation import find_violations, validate_page_config

logger = logging.getLogger(__name__)


async def _get_page(
    db: AsyncSession, owner_id: uuid.UUID, *, for_update: bool = False
) -> Page | None:
    stmt = select(Page).where(Page.owner_id == owner_id)
    if for_update:
        stmt = stmt.with_for_update()
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def ensure_page(
    db: AsyncSession,
    owner_id: uuid.UUID,
    slug: str,
    display_name: str | None = None,
) -> tuple[Page, bool]:
    """Create the owner's page if missing. Returns (page, created).

    Idempotent: an existing page is returned untouched, whatever slug is passed.
    """
    page = await _get_page(db, owner_id)
    if page is not None:
        return page, False

    result = await db.execute(select(Page.id).where(Page.slug == slug))
    if result.scalar_one_or_none() is not None:
        raise SlugTakenError(slug)

    page = Page(
        owner_id=owner_id,
        slug=slug,
        display_name=display_name,
        draft_config=empty_config_document(),
        published_config=None,
        theme_color=settings.DEFAULT_THEME_COLOR,
        font_family=settings.DEFAULT_FONT_FAMILY,
        draft_updated_at=datetime.now(UTC),
    )
    # Savepoint: a lost race must not discard the rest of the request's work
    try:
        async with db.begin_nested():
            db.add(page)
    except IntegrityError as exc:
        existing = await _get_page(db, owner_id)
        if existing is not None:
            logger.info("Page for owner %s created concurrently; reusing it", owner_id)
            return existing, False
        raise SlugTakenError(slug) from exc

    await db.refresh(page)
    logger.info("Created page %s (slug=%s) for owner %s", page.id, slug, owner_id)
    return page, True


async def get_page(db: AsyncSession, owner_id: uuid.UUID) -> Page:
    page = await _get_page(db, owner_id)
    if page is None:
        raise NotFoundError()
    return page


async def get_draft(db: AsyncSession, owner_id: uuid.UUID) -> tuple[dict, datetime | None]:
    """The owner's draft and its save time; the empty configuration if the slot is empty."""
    page = await get_page(db, owner_id)
    if page.draft_config is None:
        return empty_config_document(), page.draft_updated_at
    return page.draft_config, page.draft_updated_at


async def save_draft(
    db: AsyncSession,
    owner_id: uuid.UUID,
    candidate: Any,
    *,
    slug: str | None = None,
) -> Page:
    """Validate ``candidate`` and overwrite the draft slot.

    Without a page, a ``slug`` asks for the page to be created first; otherwise
    NotFoundError. The published slot is never touched.
    """
    config = validate_page_config(candidate)

    page = await _get_page(db, owner_id, for_update=True)
    if page is None:
        if slug is None:
            raise NotFoundError()
        page, _created = await ensure_page(db, owner_id, slug)

    page.draft_config = config.to_document()
    page.draft_updated_at = datetime.now(UTC)
    await db.flush()
    await db.refresh(page)

    logger.info("Saved draft for page %s (%d sections)", page.id, len(config.sections))
    return page


async def publish(db: AsyncSession, owner_id: uuid.UUID) -> Page:
    """Promote the current draft to the published slot."""
    page = await _get_page(db, owner_id, for_update=True)
    if page is None or page.draft_config is None:
        raise NoDraftError()

    # The schema may have tightened since the draft was saved
    config, violations = find_violations(page.draft_config)
    if config is None:
        logger.warning(
            "Refusing to publish page %s: stored draft has %d violation(s)",
            page.id,
            len(violations),
        )
        raise InvalidConfigError(violations, detail="Draft config is invalid")

    page.published_config = copy.deepcopy(page.draft_config)
    page.published_at = datetime.now(UTC)
    await db.flush()
    await db.refresh(page)

    logger.info("Published page %s", page.id)
    return page


async def update_theme(
    db: AsyncSession,
    owner_id: uuid.UUID,
    *,
    theme_color: str | None = None,
    font_family: str | None = None,
) -> Page:
    """Patch theme color and/or font. Unset arguments leave the stored value."""
    page = await _get_page(db, owner_id, for_update=True)
    if page is None:
        raise NotFoundError()

    if theme_color is not None:
        page.theme_color = theme_color
    if font_family is not None:
        page.font_family = font_family

    await db.flush()
    await db.refresh(page)
    return page


async def get_published_by_slug(db: AsyncSession, slug: str) -> tuple[Page, PageConfig]:
    """Public read. A page that was never published shows the default configuration."""
    result = await db.execute(select(Page).where(Page.slug == slug))
    page = result.scalar_one_or_none()
    if page is None:
        raise NotFoundError()

    if page.published_config is None:
        return page, DEFAULT_PAGE_CONFIG

    config, violations = find_violations(page.published_config)
    if config is None:
        logger.error(
            "Published config for page %s fails validation (%d violation(s)); serving default",
            page.id,
            len(violations),
        )
        return page, DEFAULT_PAGE_CONFIG
    return page, config
