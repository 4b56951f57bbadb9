"""
String Analyzer Service - Strings Route Handlers
================================================

What:  POST/GET/DELETE handlers for the /strings resource.
How:   Extract body, path and query parameters, delegate to StringService,
       return JSON. Errors are raised as application exceptions and turned
       into responses by the handlers registered in main.py.

Route Inventory:
    POST   /strings                                  create (201)
    GET    /strings                                  filtered list (200)
    GET    /strings/filter-by-natural-language       NL filtered list (200)
    GET    /strings/{value}                          fetch by value (200)
    DELETE /strings/{value}                          delete by value (204)

The natural-language route is registered before /strings/{value} so the
literal path wins over the catch-all parameter. A GET of that literal path
without `query` falls back to looking up the stored value of the same name.
"""

import logging
from typing import Any, Optional, Union

from fastapi import APIRouter, Body, Depends, Query, Request, Response, status

from string_analyzer.schemas.string import (
    ErrorResponse,
    FilterCriteria,
    NaturalLanguageResponse,
    StringListResponse,
    StringRecord,
)
from string_analyzer.services.string_service import StringService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Strings"])


def get_string_service(request: Request) -> StringService:
    """Dependency: a StringService bound to the application's store."""
    return StringService(request.app.state.store)


@router.post(
    "/strings",
    status_code=status.HTTP_201_CREATED,
    response_model=StringRecord,
    responses={
        400: {"description": "Missing or empty value", "model": ErrorResponse},
        409: {"description": "String already exists", "model": ErrorResponse},
        422: {"description": "Value is not a string", "model": ErrorResponse},
    },
    summary="Analyze and store a string",
)
async def create_string(
    payload: Any = Body(default=None, examples=[{"value": "Race car"}]),
    service: StringService = Depends(get_string_service),
) -> StringRecord:
    return await service.create_string(payload)


@router.get(
    "/strings",
    response_model=StringListResponse,
    responses={400: {"description": "Invalid query parameter values", "model": ErrorResponse}},
    summary="List stored strings with optional filters",
)
async def list_strings(
    is_palindrome: Optional[bool] = Query(default=None, description="Filter by palindrome status"),
    min_length: Optional[int] = Query(default=None, ge=0, description="Minimum string length"),
    max_length: Optional[int] = Query(default=None, ge=0, description="Maximum string length"),
    word_count: Optional[int] = Query(default=None, ge=0, description="Exact word count"),
    contains_character: Optional[str] = Query(
        default=None,
        min_length=1,
        description="Substring the value must contain",
    ),
    service: StringService = Depends(get_string_service),
) -> StringListResponse:
    criteria = FilterCriteria(
        is_palindrome=is_palindrome,
        min_length=min_length,
        max_length=max_length,
        word_count=word_count,
        contains_character=contains_character,
    )
    return service.list_strings(criteria)


NL_ROUTE_SEGMENT = "filter-by-natural-language"


@router.get(
    f"/strings/{NL_ROUTE_SEGMENT}",
    response_model=Union[NaturalLanguageResponse, StringRecord],
    responses={
        400: {"description": "Unable to parse natural language query", "model": ErrorResponse},
        422: {"description": "Query parsed but filters conflict", "model": ErrorResponse},
    },
    summary="Filter stored strings with a natural-language query",
)
async def filter_by_natural_language(
    query: Optional[str] = Query(
        default=None,
        min_length=1,
        description="e.g. 'all single word palindromic strings'",
    ),
    service: StringService = Depends(get_string_service),
) -> Union[NaturalLanguageResponse, StringRecord]:
    if query is None:
        # Without a query this path is a lookup of the literal value
        return service.get_string_shadowed_by_route(NL_ROUTE_SEGMENT)
    return service.filter_by_natural_language(query)


@router.get(
    "/strings/{string_value:path}",
    response_model=StringRecord,
    responses={404: {"description": "String not found", "model": ErrorResponse}},
    summary="Fetch a stored string by its exact value",
)
async def get_string(
    string_value: str,
    service: StringService = Depends(get_string_service),
) -> StringRecord:
    return service.get_string(string_value)


@router.delete(
    "/strings/{string_value:path}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "String not found", "model": ErrorResponse}},
    summary="Delete a stored string by its exact value",
)
async def delete_string(
    string_value: str,
    service: StringService = Depends(get_string_service),
) -> Response:
    await service.delete_string(string_value)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
