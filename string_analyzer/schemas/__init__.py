from string_analyzer.schemas.string import (
    ErrorResponse,
    FilterCriteria,
    HealthResponse,
    InterpretedQuery,
    NaturalLanguageResponse,
    StringListResponse,
    StringProperties,
    StringRecord,
)

__all__ = [
    "ErrorResponse",
    "FilterCriteria",
    "HealthResponse",
    "InterpretedQuery",
    "NaturalLanguageResponse",
    "StringListResponse",
    "StringProperties",
    "StringRecord",
]
