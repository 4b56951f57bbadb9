"""
String Analyzer Service - Package Initializer
=============================================

What: Marks the `string_analyzer` directory as a Python package.
Who:  Used by uvicorn (`string_analyzer.main:app`), pytest, and the
      `string-analyzer` console script.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   StringService (orchestration)     │  ← validation, response building
    ├─────────────────────────────────────┤
    │  Analyzer │ Query Engine │ NL parser│  ← pure functions
    ├─────────────────────────────────────┤
    │   StringStore (in-memory + lock)    │  ← owns the collection
    ├─────────────────────────────────────┤
    │   PersistenceBackend (JSON / SQL)   │  ← durable copy of the collection
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
