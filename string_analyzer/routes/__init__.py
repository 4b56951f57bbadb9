"""
String Analyzer Service - API Routes Package
============================================

Route Inventory:
    - strings.py: /strings CRUD, filtered and natural-language listing
    - health.py:  GET /health, GET /

Routes stay thin: they extract request data, call StringService and
return its result. Business rules live in the services package.
"""
