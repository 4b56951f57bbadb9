"""
String Analyzer Service - Custom Exception Hierarchy
===================================================

What:  Application-specific exceptions for each error scenario.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error responses with the matching HTTP status code.
Who:   Raised by the store, backends and StringService; caught by handlers.

Exception Hierarchy:
    StringAnalyzerError (base)            → 500
    ├── ValidationError                   → 400 Bad Request
    │   ├── InvalidValueTypeError         → 422 Unprocessable Entity
    │   ├── QueryParseError               → 400 Bad Request
    │   └── ConflictingFiltersError       → 422 Unprocessable Entity
    ├── DuplicateError                    → 409 Conflict
    ├── NotFoundError                     → 404 Not Found
    └── StorageError                      → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class StringAnalyzerError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
        status_code: HTTP status the global handler responds with
        code: Machine-readable error code placed in the response body
    """

    status_code = 500
    code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StringAnalyzerError):
    """
    Raised when client input fails validation.

    When:    Missing request body, missing or empty `value` field.
    HTTP:    400 Bad Request
    """

    status_code = 400
    code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidValueTypeError(ValidationError):
    """
    Raised when the request is well-formed but `value` has the wrong type.

    Example: {"value": 123}
    HTTP:    422 Unprocessable Entity
    """

    status_code = 422
    code = "invalid_type"

    def __init__(self, field: str = "value", received_type: Optional[str] = None):
        context = {"received_type": received_type} if received_type else None
        super().__init__(
            message=f'Invalid data type for "{field}" (must be string)',
            field=field,
            context=context,
        )


class QueryParseError(ValidationError):
    """
    Raised when a natural-language query matches none of the known phrases.

    HTTP:    400 Bad Request
    """

    code = "query_parse_error"

    def __init__(self, query: str):
        super().__init__(
            message="Unable to parse natural language query",
            field="query",
            context={"original": query},
        )


class ConflictingFiltersError(ValidationError):
    """
    Raised when a natural-language query parses into contradictory filters,
    e.g. "longer than 10 and shorter than 5".

    HTTP:    422 Unprocessable Entity
    """

    status_code = 422
    code = "conflicting_filters"

    def __init__(self, query: str, parsed_filters: Dict[str, Any]):
        super().__init__(
            message="Query parsed but resulted in conflicting filters",
            field="query",
            context={"original": query, "parsed_filters": parsed_filters},
        )


class DuplicateError(StringAnalyzerError):
    """
    Raised when inserting a value whose content hash is already stored.

    HTTP:    409 Conflict
    """

    status_code = 409
    code = "duplicate"

    def __init__(self, record_id: Optional[str] = None):
        ctx = {"id": record_id} if record_id else None
        super().__init__(message="String already exists in the system", context=ctx)


class NotFoundError(StringAnalyzerError):
    """
    Raised when a requested string does not exist in the store.

    When:    GET or DELETE /strings/{value} for an unknown value.
    HTTP:    404 Not Found
    """

    status_code = 404
    code = "not_found"

    def __init__(
        self,
        resource: str = "string",
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} does not exist in the system"
        ctx = context or {}
        ctx["resource"] = resource
        super().__init__(message=message, context=ctx)


class StorageError(StringAnalyzerError):
    """
    Raised when the persistence backend cannot read or write the collection.

    When:    Unreadable/malformed JSON document, disk full, permission denied,
             SQL connection failure.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; `context` holds
    the backend-specific detail and is only logged.
    """

    code = "storage_error"

    def __init__(
        self,
        message: str = "A storage error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
