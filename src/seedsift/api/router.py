"""API router — Health, adapter listing, search and history endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from seedsift.api.endpoints.health import router as health_router
from seedsift.api.endpoints.history import router as history_router
from seedsift.api.endpoints.search import router as search_router

router = APIRouter(tags=["api"])
router.include_router(search_router)
router.include_router(history_router)
router.include_router(health_router)
