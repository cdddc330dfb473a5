"""
ChefNotes Backend — Health Check Route
========================================

What:  Health endpoint for monitoring and container probes.
How:   Reports Gemini reachability and the store's record counts.

Status levels:
    - healthy:  Gemini reachable
    - degraded: Gemini unreachable; CRUD still works, conversion will fail
"""

import logging
import time

from fastapi import APIRouter, Depends

from chefnotes import __version__
from chefnotes.models.entities import EntityKind
from chefnotes.schemas.recipe import HealthResponse
from chefnotes.services.gemini_service import gemini_service
from chefnotes.store import RecipeStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: RecipeStore = Depends(get_store)) -> HealthResponse:
    gemini_status = "available"
    overall = "healthy"

    if not await gemini_service.health_check():
        gemini_status = "unavailable"
        overall = "degraded"

    return HealthResponse(
        status=overall,
        version=__version__,
        gemini=gemini_status,
        recipes=store.count(EntityKind.RECIPE),
        audio_recordings=store.count(EntityKind.AUDIO_RECORDING),
        text_notes=store.count(EntityKind.TEXT_NOTE),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
