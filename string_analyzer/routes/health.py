"""
String Analyzer Service - Health & Root Routes
==============================================

What:  GET /health for monitoring checks and GET / as a service banner.
How:   Health reports the backend in use and the number of stored strings;
       the store is "unhealthy" until its collection has been loaded.
"""

import logging
import time

from fastapi import APIRouter, Request

from string_analyzer import __version__
from string_analyzer.schemas.string import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    store = request.app.state.store
    return HealthResponse(
        status="healthy" if store.loaded else "unhealthy",
        version=__version__,
        backend=store.backend.name,
        record_count=store.count,
        uptime_seconds=round(time.time() - _start_time, 2),
    )


@router.get("/", summary="Service banner")
async def root() -> dict:
    return {
        "message": "String Analyzer Service",
        "version": __version__,
        "endpoints": {
            "POST /strings": "Analyze and store a string",
            "GET /strings/{string_value}": "Get a stored string",
            "GET /strings": "List strings with optional filters",
            "GET /strings/filter-by-natural-language": "Filter using natural language",
            "DELETE /strings/{string_value}": "Delete a string",
        },
    }
