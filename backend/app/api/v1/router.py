"""Aggregate all v1 sub-routers."""

from fastapi import APIRouter

from app.api.v1.health import router as health_router
from app.api.v1.hero import admin_router as hero_admin_router
from app.api.v1.hero import public_router as site_router
from app.api.v1.pages import router as pages_router
from app.api.v1.public_pages import router as public_pages_router

api_v1_router = APIRouter()

api_v1_router.include_router(health_router, tags=["health"])
# /pages/me must be registered before the public /pages/{slug}
api_v1_router.include_router(pages_router, prefix="/pages/me", tags=["pages"])
api_v1_router.include_router(public_pages_router, prefix="/pages", tags=["public-pages"])
api_v1_router.include_router(site_router, prefix="/site", tags=["site"])
api_v1_router.include_router(hero_admin_router, prefix="/admin/hero", tags=["admin-hero"])
