"""API router that aggregates all routes."""

from fastapi import APIRouter

from app.api.routes import categories, health, posts, upload

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(posts.router)
api_router.include_router(categories.router)
api_router.include_router(upload.router)
