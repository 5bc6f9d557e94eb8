"""Built-in page configurations.

EMPTY_PAGE_CONFIG seeds a new page's draft. DEFAULT_PAGE_CONFIG is what public
readers see for a page that has never been published.
"""

from app.schemas.page_config import PageConfig

EMPTY_PAGE_CONFIG = PageConfig.model_validate(
    {
        "background": {"kind": "color", "value": "#000000"},
        "sections": [],
        "show_hero_thumb_strip": True,
        "show_logo": True,
        "show_social_links": True,
    }
)

DEFAULT_PAGE_CONFIG = PageConfig.model_validate(
    {
        "background": {"kind": "color", "value": "#000000"},
        "logo": {},
        "social_links": [
            {
                "id": "social-1",
                "name": "Twitter",
                "url": "https://twitter.com/example",
                "icon": "X",
                "enabled": True,
            },
            {
                "id": "social-2",
                "name": "YouTube",
                "url": "https://youtube.com/example",
                "icon": "YT",
                "enabled": True,
            },
            {
                "id": "social-3",
                "name": "GitHub",
                "url": "https://github.com/example",
                "icon": "GH",
                "enabled": True,
            },
        ],
        "sections": [
            {
                "id": "hero-1",
                "type": "hero",
                "enabled": True,
                "order": 0,
                "props": {
                    "slides": [
                        {"src": "/hero/1.jpeg", "alt": "Hero 1"},
                        {"src": "/hero/2.jpeg", "alt": "Hero 2"},
                        {"src": "/hero/3.jpeg", "alt": "Hero 3"},
                    ],
                    "title": "Welcome",
                    "subtitle": "Personal Page",
                },
            },
            {
                "id": "links-1",
                "type": "links",
                "enabled": True,
                "order": 1,
                "props": {
                    "items": [
                        {
                            "id": "link-1",
                            "label": "Twitter",
                            "href": "https://twitter.com/example",
                        },
                        {
                            "id": "link-2",
                            "label": "YouTube",
                            "href": "https://youtube.com/example",
                        },
                        {
                            "id": "link-3",
                            "label": "GitHub",
                            "href": "https://github.com/example",
                        },
                    ],
                    "layout": "grid",
                },
            },
            {
                "id": "gallery-1",
                "type": "gallery",
                "enabled": True,
                "order": 2,
                "props": {"items": [], "columns": 3, "gap": "md"},
            },
        ],
        "show_hero_thumb_strip": True,
        "show_logo": True,
        "show_social_links": True,
        "meta": {"title": "My Page", "description": "Welcome to my personal page"},
    }
)


def empty_config_document() -> dict:
    return EMPTY_PAGE_CONFIG.to_document()
