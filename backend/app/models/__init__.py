from app.models.page import Page
from app.models.site_config import SiteConfig
from app.models.user import User

__all__ = [
    "Page",
    "SiteConfig",
    "User",
]
