"""Shared helpers for page API tests."""

import copy
import uuid

from httpx import AsyncClient

from app.core.security import create_mock_access_token


def auth_headers(
    sub: str = "test-sub",
    email: str = "test@example.com",
    groups: list[str] | None = None,
) -> dict:
    """Return Authorization headers with a mock JWT."""
    token = create_mock_access_token(sub=sub, email=email, groups=groups)
    return {"Authorization": f"Bearer {token}"}


def new_owner_headers(prefix: str = "owner", groups: list[str] | None = None) -> dict:
    """Headers for a fresh, unique user (auto-provisioned on first request)."""
    unique = uuid.uuid4().hex[:8]
    return auth_headers(
        sub=f"{prefix}-sub-{unique}",
        email=f"{prefix}-{unique}@example.com",
        groups=groups,
    )


async def create_page_get_headers(
    client: AsyncClient,
    *,
    slug_prefix: str = "page",
) -> tuple[dict, str]:
    """Create a page via the API and return (auth_headers, slug)."""
    headers = new_owner_headers(slug_prefix)
    slug = f"{slug_prefix}-{uuid.uuid4().hex[:8]}"

    resp = await client.post("/api/v1/pages/me", json={"slug": slug}, headers=headers)
    assert resp.status_code == 201, resp.text
    return headers, slug


VALID_CONFIG = {
    "background": {"kind": "color", "value": "#112233"},
    "sections": [
        {
            "id": "hero-a",
            "type": "hero",
            "enabled": True,
            "order": 0,
            "props": {
                "slides": [{"src": "/uploads/a.png", "alt": "A"}],
                "title": "Hello",
            },
        },
        {
            "id": "links-a",
            "type": "links",
            "enabled": True,
            "order": 1,
            "props": {
                "items": [
                    {"id": "l1", "label": "Site", "href": "https://example.com"},
                    {"id": "l2", "label": "Mail", "href": "mailto:me@example.com"},
                ],
                "layout": "list",
            },
        },
        {
            "id": "gallery-a",
            "type": "gallery",
            "enabled": False,
            "order": 2,
            "props": {
                "items": [{"id": "g1", "src": "/uploads/g1.png", "caption": "One"}],
                "columns": 4,
                "gap": "lg",
            },
        },
        {
            "id": "video-a",
            "type": "video",
            "enabled": True,
            "order": 3,
            "props": {
                "items": [
                    {
                        "id": "v1",
                        "url": "https://www.youtube.com/watch?v=abc",
                        "platform": "youtube",
                    }
                ],
            },
        },
    ],
    "meta": {"title": "My page", "description": "About me"},
}


def valid_config() -> dict:
    """A fresh deep copy of VALID_CONFIG, safe to mutate."""
    return copy.deepcopy(VALID_CONFIG)
