"""
Schemas module - Request/Response schemas for API endpoints.

Difference from models:
- Models: repository functions issuing SQL, returning plain dicts
- Schemas: API contract (what client sends/receives)
"""
