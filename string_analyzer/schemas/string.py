"""
String Analyzer Service - Pydantic Schemas
==========================================

What:  Pydantic models for stored records, filter criteria and API responses.
How:   The same `StringRecord` model is persisted by the backends
       (model_dump(mode="json")) and returned by the routes, so a stored
       record and its API representation never drift apart.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Domain Models
# ══════════════════════════════════════════════════════════════════════════


class StringProperties(BaseModel):
    """Derived properties; every field is a pure function of the value."""

    length: int = Field(description="Number of characters in the value")
    is_palindrome: bool = Field(
        description="Value reads the same backwards, ignoring case and whitespace"
    )
    unique_characters: int = Field(description="Distinct characters of the lower-cased value")
    word_count: int = Field(description="Whitespace-delimited tokens")
    sha256_hash: str = Field(description="SHA-256 hex digest of the value")
    character_frequency_map: Dict[str, int] = Field(
        description="Occurrences of each character of the raw value"
    )

    model_config = {"frozen": True}


class StringRecord(BaseModel):
    """
    What:  A stored string plus its derived properties and metadata.
    Who:   Created by StringService.create_string, held by StringStore,
           written by the persistence backends, returned by every endpoint.

    Records are immutable: there is no update operation anywhere.
    """

    id: str = Field(description="SHA-256 of the value; unique identifier and dedup key")
    value: str = Field(description="The original string")
    properties: StringProperties
    created_at: datetime = Field(description="Insertion time (UTC ISO 8601)")

    model_config = {"frozen": True}


class FilterCriteria(BaseModel):
    """
    Optional predicates for listing, logically ANDed.

    contains_character is a substring test, so multi-character values
    are accepted.
    """

    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = Field(default=None, ge=0)
    max_length: Optional[int] = Field(default=None, ge=0)
    word_count: Optional[int] = Field(default=None, ge=0)
    contains_character: Optional[str] = Field(default=None, min_length=1)

    def applied(self) -> Dict[str, Any]:
        """Only the criteria that were actually supplied."""
        return self.model_dump(exclude_none=True)

    def is_empty(self) -> bool:
        return not self.applied()


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class StringListResponse(BaseModel):
    """Returned by GET /strings."""

    data: List[StringRecord]
    count: int
    filters_applied: Dict[str, Any] = Field(default_factory=dict)


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict[str, Any]


class NaturalLanguageResponse(BaseModel):
    """Returned by GET /strings/filter-by-natural-language."""

    data: List[StringRecord]
    count: int
    interpreted_query: InterpretedQuery


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by every failing endpoint.

    Example:
        {
            "error": "String already exists in the system",
            "code": "duplicate",
            "details": {"id": "2cf24dba..."},
            "request_id": "1a2b3c4d"
        }
    """

    error: str = Field(description="Human-readable error message")
    code: str = Field(description="Machine-readable error code")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    backend: str = Field(description="Persistence backend in use")
    record_count: int = Field(description="Number of stored strings")
    uptime_seconds: float = Field(description="Seconds since service started")
