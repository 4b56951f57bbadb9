"""
String Analyzer Service - Services Layer
========================================

Service Inventory:
    - analyzer:       pure string → StringProperties computation
    - query_engine:   FilterCriteria → stable subsequence of records
    - nl_query:       natural-language phrase → FilterCriteria
    - backends:       PersistenceBackend (abstract), JsonFileBackend, SqlBackend
    - store:          StringStore, the in-memory collection with write-through
    - string_service: StringService, orchestration used by the routes
"""
