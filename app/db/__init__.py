"""
Database module - PostgreSQL connection and schema.
"""
from app.db.postgres import get_db, test_postgres_connection

__all__ = [
    "get_db",
    "test_postgres_connection",
]
