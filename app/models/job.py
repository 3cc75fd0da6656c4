"""
Job repository.

Records: {id, title, salary, equity, companyHandle}
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.errors import BadRequestError, NotFoundError, ReferenceValidationError
from app.db.postgres import execute_one, execute_raw_sql
from app.helpers.sql import (
    FilterRule, bind_params, placeholder, sql_for_filters,
    require_fields, sql_for_partial_update, text_contains, where_clause,
)

logger = logging.getLogger(__name__)

# id and companyHandle are fixed at creation
MUTABLE_FIELDS = {"title", "salary", "equity"}

FILTERS = {
    "title": text_contains("title"),
    "minSalary": FilterRule("salary >= {}"),
    "hasEquity": FilterRule("equity > 0", flag=True),
}

COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'


def create(db: Session, data: Dict[str, Any]) -> dict:
    """
    Create a job and return it with its generated id.

    data should be {title, salary, equity, companyHandle}

    Raises BadRequestError if title or companyHandle is missing,
    ReferenceValidationError if the company does not exist.
    """
    require_fields(data, "title", "companyHandle")
    company_handle = data["companyHandle"]
    company = execute_one(
        db, "SELECT handle FROM companies WHERE handle = :p1", bind_params([company_handle])
    )
    if not company:
        raise ReferenceValidationError(f"No company: {company_handle}")

    job = execute_one(
        db,
        f"""INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES (:p1, :p2, :p3, :p4)
            RETURNING {COLUMNS}""",
        bind_params([data["title"], data.get("salary"), data.get("equity"), company_handle]),
    )
    logger.info("Created job %s for %s", job["id"], company_handle)
    return job


def find_all(db: Session, filters: Optional[Dict[str, Any]] = None) -> List[dict]:
    """
    Find all jobs, ordered by id.

    Recognized filters: title (case-insensitive substring), minSalary,
    hasEquity (true restricts to equity > 0). Anything else is ignored.
    """
    predicate, values = sql_for_filters(filters, FILTERS)
    return execute_raw_sql(
        db,
        f"""SELECT {COLUMNS}
            FROM jobs
            {where_clause(predicate)}
            ORDER BY id""",
        bind_params(values),
    )


def get(db: Session, job_id: int) -> dict:
    """Return one job. Raises NotFoundError if not found."""
    job = execute_one(db, f"SELECT {COLUMNS} FROM jobs WHERE id = :p1", bind_params([job_id]))
    if not job:
        raise NotFoundError(f"No job: {job_id}")
    return job


def update(db: Session, job_id: int, data: Dict[str, Any]) -> dict:
    """
    Partial update of title, salary and/or equity.

    Raises BadRequestError for no data or an immutable field,
    NotFoundError if the job does not exist.
    """
    immutable = sorted(set(data) - MUTABLE_FIELDS)
    if immutable:
        raise BadRequestError(f"Cannot update: {', '.join(immutable)}")

    set_cols, values = sql_for_partial_update(data, {})
    job = execute_one(
        db,
        f"""UPDATE jobs
            SET {set_cols}
            WHERE id = {placeholder(len(values) + 1)}
            RETURNING {COLUMNS}""",
        bind_params([*values, job_id]),
    )
    if not job:
        raise NotFoundError(f"No job: {job_id}")
    return job


def remove(db: Session, job_id: int) -> None:
    """Delete a job. Raises NotFoundError if not found."""
    deleted = execute_one(db, "DELETE FROM jobs WHERE id = :p1 RETURNING id", bind_params([job_id]))
    if not deleted:
        raise NotFoundError(f"No job: {job_id}")
    logger.info("Removed job %s", job_id)
