"""Main API routes for Exec Stats."""

from fastapi import APIRouter

from .dashboard import router as dashboard_router

# Main API router
router = APIRouter()

router.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])
