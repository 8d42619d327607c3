"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/limits", status_code=status.HTTP_200_OK)
def health_limits() -> dict:
    """Report the optimizer limits this instance enforces."""
    return {
        "max_waypoints": settings.max_waypoints,
        "two_opt_max_sweeps": settings.two_opt_max_sweeps,
        "two_opt_time_limit_seconds": settings.two_opt_time_limit_seconds,
    }
