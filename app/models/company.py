"""
Company repository.

Records are dicts keyed by the API's field names:
    {handle, name, description, numEmployees, logoUrl}
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.errors import BadRequestError, ConflictError, NotFoundError
from app.db.postgres import execute_one, execute_raw_sql
from app.helpers.sql import (
    FilterRule, bind_params, placeholder, sql_for_filters,
    require_fields, sql_for_partial_update, text_contains, where_clause,
)

logger = logging.getLogger(__name__)

JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

MUTABLE_FIELDS = {"name", "description", "numEmployees", "logoUrl"}

FILTERS = {
    "minEmployees": FilterRule("num_employees >= {}"),
    "maxEmployees": FilterRule("num_employees <= {}"),
    "name": text_contains("name"),
}

COLUMNS = ('handle, name, description, '
           'num_employees AS "numEmployees", logo_url AS "logoUrl"')


def create(db: Session, data: Dict[str, Any]) -> dict:
    """
    Create a company from data and return it.

    data should be {handle, name, description, numEmployees, logoUrl};
    only handle and name are required.

    Raises BadRequestError if handle or name is missing,
    ConflictError if the handle or name is already taken.
    """
    require_fields(data, "handle", "name")
    handle = data["handle"]
    duplicate = execute_one(
        db,
        "SELECT handle FROM companies WHERE handle = :p1 OR name = :p2",
        bind_params([handle, data["name"]]),
    )
    if duplicate:
        raise ConflictError(f"Duplicate company: {handle} / {data['name']}")

    company = execute_one(
        db,
        f"""INSERT INTO companies
                (handle, name, description, num_employees, logo_url)
            VALUES (:p1, :p2, :p3, :p4, :p5)
            RETURNING {COLUMNS}""",
        bind_params([
            handle,
            data["name"],
            data.get("description"),
            data.get("numEmployees"),
            data.get("logoUrl"),
        ]),
    )
    logger.info("Created company %s", handle)
    return company


def find_all(db: Session, filters: Optional[Dict[str, Any]] = None) -> List[dict]:
    """
    Find all companies, ordered by name.

    Recognized filters: minEmployees, maxEmployees, name (case-insensitive
    substring). Anything else is ignored.

    Raises BadRequestError if minEmployees > maxEmployees.
    """
    filters = filters or {}
    min_employees = filters.get("minEmployees")
    max_employees = filters.get("maxEmployees")
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise BadRequestError("minEmployees cannot be greater than maxEmployees")

    predicate, values = sql_for_filters(filters, FILTERS)
    return execute_raw_sql(
        db,
        f"""SELECT {COLUMNS}
            FROM companies
            {where_clause(predicate)}
            ORDER BY name""",
        bind_params(values),
    )


def get(db: Session, handle: str) -> dict:
    """
    Return a company with its jobs.

    Returns {handle, name, description, numEmployees, logoUrl, jobs}
      where jobs is [{id, title, salary, equity}, ...]

    Raises NotFoundError if not found.
    """
    company = execute_one(
        db,
        f"SELECT {COLUMNS} FROM companies WHERE handle = :p1",
        bind_params([handle]),
    )
    if not company:
        raise NotFoundError(f"No company: {handle}")

    company["jobs"] = execute_raw_sql(
        db,
        """SELECT id, title, salary, equity
           FROM jobs
           WHERE company_handle = :p1
           ORDER BY id""",
        bind_params([handle]),
    )
    return company


def update(db: Session, handle: str, data: Dict[str, Any]) -> dict:
    """
    Partial update: only the supplied fields change.

    Data can include: {name, description, numEmployees, logoUrl}

    Raises BadRequestError for no data or an immutable field,
    ConflictError if another company already has the new name,
    NotFoundError if the company does not exist.
    """
    immutable = sorted(set(data) - MUTABLE_FIELDS)
    if immutable:
        raise BadRequestError(f"Cannot update: {', '.join(immutable)}")

    if "name" in data:
        taken = execute_one(
            db,
            "SELECT handle FROM companies WHERE name = :p1 AND handle <> :p2",
            bind_params([data["name"], handle]),
        )
        if taken:
            raise ConflictError(f"Duplicate company name: {data['name']}")

    set_cols, values = sql_for_partial_update(data, JS_TO_SQL)
    company = execute_one(
        db,
        f"""UPDATE companies
            SET {set_cols}
            WHERE handle = {placeholder(len(values) + 1)}
            RETURNING {COLUMNS}""",
        bind_params([*values, handle]),
    )
    if not company:
        raise NotFoundError(f"No company: {handle}")
    return company


def remove(db: Session, handle: str) -> None:
    """Delete a company. Raises NotFoundError if not found."""
    deleted = execute_one(
        db,
        "DELETE FROM companies WHERE handle = :p1 RETURNING handle",
        bind_params([handle]),
    )
    if not deleted:
        raise NotFoundError(f"No company: {handle}")
    logger.info("Removed company %s", handle)
