"""Itinerary optimization endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse

from ...schemas.itinerary import OptimizeRequest, OptimizeResponse
from ...services.itinerary.service import optimize_itinerary
from ...services.outputs.itinerary_formatter import itinerary_to_csv

router = APIRouter(prefix="/itinerary", tags=["itinerary"])


def _run_optimizer(payload: OptimizeRequest) -> OptimizeResponse:
    try:
        return optimize_itinerary(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error optimizing itinerary: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize itinerary: {str(exc)}",
        ) from exc


@router.post(
    "/optimize",
    response_model=OptimizeResponse,
    status_code=status.HTTP_200_OK,
)
def optimize(payload: OptimizeRequest) -> OptimizeResponse:
    return _run_optimizer(payload)


@router.post("/optimize/csv", response_class=PlainTextResponse, status_code=status.HTTP_200_OK)
def optimize_csv(payload: OptimizeRequest) -> PlainTextResponse:
    """Optimize and return the day-by-day schedule as CSV, one row per stop."""
    response = _run_optimizer(payload)
    return PlainTextResponse(
        content=itinerary_to_csv(response),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="itinerary.csv"'},
    )
