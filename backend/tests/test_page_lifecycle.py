"""Draft/publish lifecycle service tests (direct DB, no HTTP)."""

import uuid

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidConfigError, NoDraftError, NotFoundError, SlugTakenError
from app.models.user import User
from app.services import page_lifecycle
from app.services.page_defaults import DEFAULT_PAGE_CONFIG, empty_config_document
from tests.helpers import valid_config

pytestmark = pytest.mark.lifecycle


def _slug() -> str:
    return f"page-{uuid.uuid4().hex[:8]}"


async def _other_user(db: AsyncSession) -> User:
    user = User(
        cognito_sub=f"other-sub-{uuid.uuid4().hex[:8]}",
        email=f"other-{uuid.uuid4().hex[:8]}@example.com",
        full_name="Other User",
    )
    db.add(user)
    await db.flush()
    return user


# ── ensure_page ──────────────────────────────────────────────────────


async def test_ensure_page_creates_draft_only_page(db: AsyncSession, seed_user: User):
    slug = _slug()
    page, created = await page_lifecycle.ensure_page(db, seed_user.id, slug, display_name="Me")

    assert created is True
    assert page.slug == slug
    assert page.display_name == "Me"
    assert page.draft_config == empty_config_document()
    assert page.published_config is None
    assert page.has_published is False
    assert page.theme_color == "#000000"
    assert page.font_family == "Inter"


async def test_ensure_page_is_idempotent(db: AsyncSession, seed_user: User):
    first, created = await page_lifecycle.ensure_page(db, seed_user.id, _slug())
    second, created_again = await page_lifecycle.ensure_page(db, seed_user.id, _slug())

    assert created is True
    assert created_again is False
    assert second.id == first.id
    assert second.slug == first.slug


async def test_ensure_page_rejects_taken_slug(db: AsyncSession, seed_user: User):
    slug = _slug()
    await page_lifecycle.ensure_page(db, seed_user.id, slug)
    other = await _other_user(db)

    with pytest.raises(SlugTakenError):
        await page_lifecycle.ensure_page(db, other.id, slug)


async def test_ensure_page_losing_creation_race_returns_existing(
    db: AsyncSession, seed_user: User, monkeypatch: pytest.MonkeyPatch
):
    existing, _ = await page_lifecycle.ensure_page(db, seed_user.id, _slug())

    # The first lookup misses, as if another request created the page meanwhile
    real_get_page = page_lifecycle._get_page
    calls = []

    async def stale_get_page(session, owner_id, **kwargs):
        calls.append(owner_id)
        if len(calls) == 1:
            return None
        return await real_get_page(session, owner_id, **kwargs)

    monkeypatch.setattr(page_lifecycle, "_get_page", stale_get_page)

    page, created = await page_lifecycle.ensure_page(db, seed_user.id, _slug())

    assert created is False
    assert page.id == existing.id
    assert page.slug == existing.slug
    # Earlier work in the same transaction survives
    result = await db.execute(select(User.id).where(User.id == seed_user.id))
    assert result.scalar_one() == seed_user.id


async def test_get_page_without_page_raises_not_found(db: AsyncSession, seed_user: User):
    with pytest.raises(NotFoundError):
        await page_lifecycle.get_page(db, seed_user.id)
    with pytest.raises(NotFoundError):
        await page_lifecycle.get_draft(db, seed_user.id)


# ── save_draft ───────────────────────────────────────────────────────


async def test_save_draft_without_page_raises_not_found(db: AsyncSession, seed_user: User):
    with pytest.raises(NotFoundError):
        await page_lifecycle.save_draft(db, seed_user.id, valid_config())


async def test_save_draft_with_slug_creates_page(db: AsyncSession, seed_user: User):
    slug = _slug()
    page = await page_lifecycle.save_draft(db, seed_user.id, valid_config(), slug=slug)

    assert page.slug == slug
    assert page.draft_config["sections"][0]["id"] == "hero-a"
    assert page.published_config is None


async def test_invalid_candidate_leaves_draft_untouched(db: AsyncSession, seed_user: User):
    await page_lifecycle.ensure_page(db, seed_user.id, _slug())
    await page_lifecycle.save_draft(db, seed_user.id, valid_config())

    bad = valid_config()
    bad["sections"][1]["props"]["items"][0]["href"] = "not-a-url"
    with pytest.raises(InvalidConfigError) as exc_info:
        await page_lifecycle.save_draft(db, seed_user.id, bad)
    assert exc_info.value.violations[0].path == "sections.1.props.items.0.href"

    draft, _saved_at = await page_lifecycle.get_draft(db, seed_user.id)
    assert draft["sections"][1]["props"]["items"][0]["href"] == "https://example.com"


async def test_save_draft_stores_canonical_document(db: AsyncSession, seed_user: User):
    await page_lifecycle.ensure_page(db, seed_user.id, _slug())
    raw = valid_config()
    raw["unknownKey"] = True

    page = await page_lifecycle.save_draft(db, seed_user.id, raw)
    assert "unknownKey" not in page.draft_config
    assert page.draft_updated_at is not None


async def test_save_draft_never_touches_published(db: AsyncSession, seed_user: User):
    await page_lifecycle.ensure_page(db, seed_user.id, _slug())
    await page_lifecycle.save_draft(db, seed_user.id, valid_config())
    published = await page_lifecycle.publish(db, seed_user.id)
    snapshot = published.published_config

    changed = valid_config()
    changed["meta"]["title"] = "Changed"
    page = await page_lifecycle.save_draft(db, seed_user.id, changed)

    assert page.draft_config["meta"]["title"] == "Changed"
    assert page.published_config == snapshot
    assert page.published_config["meta"]["title"] == "My page"


# ── publish ──────────────────────────────────────────────────────────


async def test_publish_without_page_raises_no_draft(db: AsyncSession, seed_user: User):
    with pytest.raises(NoDraftError):
        await page_lifecycle.publish(db, seed_user.id)


async def test_publish_copies_draft(db: AsyncSession, seed_user: User):
    await page_lifecycle.ensure_page(db, seed_user.id, _slug())
    saved = await page_lifecycle.save_draft(db, seed_user.id, valid_config())
    draft = dict(saved.draft_config)

    page = await page_lifecycle.publish(db, seed_user.id)
    assert page.published_config == draft
    assert page.draft_config == draft
    assert page.published_at is not None
    assert page.has_published is True


async def test_publish_twice_is_idempotent(db: AsyncSession, seed_user: User):
    await page_lifecycle.ensure_page(db, seed_user.id, _slug())
    await page_lifecycle.save_draft(db, seed_user.id, valid_config())

    first = dict((await page_lifecycle.publish(db, seed_user.id)).published_config)
    second = (await page_lifecycle.publish(db, seed_user.id)).published_config
    assert second == first


async def test_publish_with_null_draft_keeps_prior_published(db: AsyncSession, seed_user: User):
    page, _ = await page_lifecycle.ensure_page(db, seed_user.id, _slug())
    await page_lifecycle.save_draft(db, seed_user.id, valid_config())
    await page_lifecycle.publish(db, seed_user.id)
    prior = dict(page.published_config)

    page.draft_config = None
    await db.flush()

    with pytest.raises(NoDraftError):
        await page_lifecycle.publish(db, seed_user.id)
    assert page.published_config == prior


async def test_publish_rejects_invalid_stored_draft(db: AsyncSession, seed_user: User):
    page, _ = await page_lifecycle.ensure_page(db, seed_user.id, _slug())
    page.draft_config = {"background": {"kind": "color", "value": "blue"}, "sections": []}
    await db.flush()

    with pytest.raises(InvalidConfigError) as exc_info:
        await page_lifecycle.publish(db, seed_user.id)
    assert exc_info.value.detail == "Draft config is invalid"
    assert [v.path for v in exc_info.value.violations] == ["background.value"]
    assert page.published_config is None


# ── theme ────────────────────────────────────────────────────────────


async def test_update_theme_patches_only_given_fields(db: AsyncSession, seed_user: User):
    await page_lifecycle.ensure_page(db, seed_user.id, _slug())

    page = await page_lifecycle.update_theme(db, seed_user.id, theme_color="#336699")
    assert page.theme_color == "#336699"
    assert page.font_family == "Inter"

    page = await page_lifecycle.update_theme(db, seed_user.id, font_family="Roboto")
    assert page.theme_color == "#336699"
    assert page.font_family == "Roboto"


async def test_update_theme_without_page_raises_not_found(db: AsyncSession, seed_user: User):
    with pytest.raises(NotFoundError):
        await page_lifecycle.update_theme(db, seed_user.id, theme_color="#336699")


# ── public read ──────────────────────────────────────────────────────


async def test_public_read_unknown_slug_raises_not_found(db: AsyncSession):
    with pytest.raises(NotFoundError):
        await page_lifecycle.get_published_by_slug(db, "no-such-page")


async def test_public_read_never_published_serves_default(db: AsyncSession, seed_user: User):
    slug = _slug()
    await page_lifecycle.ensure_page(db, seed_user.id, slug)
    await page_lifecycle.save_draft(db, seed_user.id, valid_config())

    _page, config = await page_lifecycle.get_published_by_slug(db, slug)
    assert config == DEFAULT_PAGE_CONFIG


async def test_public_read_returns_published_not_draft(db: AsyncSession, seed_user: User):
    slug = _slug()
    await page_lifecycle.ensure_page(db, seed_user.id, slug)
    await page_lifecycle.save_draft(db, seed_user.id, valid_config())
    await page_lifecycle.publish(db, seed_user.id)

    changed = valid_config()
    changed["meta"]["title"] = "Unpublished edit"
    await page_lifecycle.save_draft(db, seed_user.id, changed)

    _page, config = await page_lifecycle.get_published_by_slug(db, slug)
    assert config.meta.title == "My page"


async def test_public_read_corrupt_published_serves_default(db: AsyncSession, seed_user: User):
    slug = _slug()
    page, _ = await page_lifecycle.ensure_page(db, seed_user.id, slug)
    page.published_config = {"sections": "oops"}
    await db.flush()

    _page, config = await page_lifecycle.get_published_by_slug(db, slug)
    assert config == DEFAULT_PAGE_CONFIG
