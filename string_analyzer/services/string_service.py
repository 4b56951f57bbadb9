"""
String Analyzer Service - String Service (Business Logic Orchestrator)
======================================================================

What:  Coordinates validate → analyze → store for creation, and
       store → query engine for listing.
How:   Composes the Analyzer, Query Engine, NL parser and a StringStore.
Who:   Called by the route handlers in routes/strings.py.

Orchestration Flow (POST /strings):
    ┌──────────┐    ┌───────────┐    ┌───────────┐    ┌──────────────┐
    │  Body    │───▶│ Validate  │───▶│  Analyze  │───▶│ Store.insert │
    │  (Route) │    │ (400/422) │    │ (pure)    │    │ (409 / save) │
    └──────────┘    └───────────┘    └───────────┘    └──────────────┘

Errors propagate as application exceptions; the global handlers in
main.py translate them into HTTP responses.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from string_analyzer.exceptions import InvalidValueTypeError, NotFoundError, ValidationError
from string_analyzer.schemas.string import (
    FilterCriteria,
    InterpretedQuery,
    NaturalLanguageResponse,
    StringListResponse,
    StringRecord,
)
from string_analyzer.services.analyzer import analyze
from string_analyzer.services.nl_query import parse_natural_language_query
from string_analyzer.services.query_engine import filter_records
from string_analyzer.services.store import StringStore

logger = logging.getLogger(__name__)


class StringService:
    """
    Business logic layer for string operations.

    Responsibilities:
        - create_string(): validate the request body, analyze, insert
        - get_string(): lookup by exact value with not-found handling
        - list_strings(): filtered listing
        - filter_by_natural_language(): NL query → criteria → listing
        - delete_string(): removal with not-found handling
    """

    def __init__(self, store: StringStore):
        self.store = store

    @staticmethod
    def validate_payload(payload: Any) -> str:
        """
        Extract `value` from a decoded JSON body.

        Raises:
            ValidationError: body missing / not an object / no value / empty value (→ 400)
            InvalidValueTypeError: value is present but not a string (→ 422)
        """
        if not isinstance(payload, dict):
            raise ValidationError(
                message='Invalid request body or missing "value" field',
                field="value",
            )
        if "value" not in payload or payload["value"] is None:
            raise ValidationError(message='Missing "value" field', field="value")

        value = payload["value"]
        if not isinstance(value, str):
            raise InvalidValueTypeError(field="value", received_type=type(value).__name__)
        if value == "":
            raise ValidationError(message='"value" must not be empty', field="value")
        return value

    async def create_string(self, payload: Any) -> StringRecord:
        """
        Analyze and store a new string.

        Raises:
            ValidationError / InvalidValueTypeError: bad request body
            DuplicateError: the value is already stored (→ 409)
            StorageError: persisting the collection failed (→ 500)
        """
        value = self.validate_payload(payload)
        properties = analyze(value)
        record = StringRecord(
            id=properties.sha256_hash,
            value=value,
            properties=properties,
            created_at=datetime.now(timezone.utc),
        )
        return await self.store.insert(record)

    def get_string(self, value: str) -> StringRecord:
        record = self.store.find_by_value(value)
        if record is None:
            raise NotFoundError(resource="string")
        return record

    def get_string_shadowed_by_route(self, value: str) -> StringRecord:
        """
        Fetch a stored string whose value equals a literal path segment under
        /strings, e.g. "filter-by-natural-language".

        Such a request is routed to the literal endpoint without that endpoint's
        parameters. If nothing is stored under the value, the request really
        was a malformed call to the literal endpoint.

        Raises:
            ValidationError: no such string, so the `query` parameter was required (→ 400)
        """
        record = self.store.find_by_value(value)
        if record is None:
            raise ValidationError(message='Missing "query" parameter', field="query")
        return record

    def list_strings(self, criteria: FilterCriteria) -> StringListResponse:
        results = filter_records(self.store.list_all(), criteria)
        return StringListResponse(
            data=results,
            count=len(results),
            filters_applied=criteria.applied(),
        )

    def filter_by_natural_language(self, query: str) -> NaturalLanguageResponse:
        """
        Interpret `query` and list the matching strings.

        Raises:
            QueryParseError: nothing recognized (→ 400)
            ConflictingFiltersError: contradictory length bounds (→ 422)
        """
        criteria = parse_natural_language_query(query)
        results = filter_records(self.store.list_all(), criteria)
        logger.info("Natural language query %r matched %d strings", query, len(results))
        return NaturalLanguageResponse(
            data=results,
            count=len(results),
            interpreted_query=InterpretedQuery(
                original=query,
                parsed_filters=criteria.applied(),
            ),
        )

    async def delete_string(self, value: str) -> None:
        await self.store.delete(value)
