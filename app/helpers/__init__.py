"""
Helpers module - SQL fragment builders shared by the repositories.
"""
from app.helpers.sql import (
    FilterRule,
    bind_params,
    placeholder,
    require_fields,
    sql_for_filters,
    sql_for_partial_update,
    where_clause,
)

__all__ = [
    "FilterRule",
    "bind_params",
    "placeholder",
    "require_fields",
    "sql_for_filters",
    "sql_for_partial_update",
    "where_clause",
]
