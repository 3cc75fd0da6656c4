"""
User repository.

Records: {username, firstName, lastName, email, isAdmin}; the password hash
never leaves this module.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import text
from sqlalchemy.orm import Session

from app.core.auth import hash_password, verify_password
from app.core.errors import BadRequestError, ConflictError, NotFoundError, UnauthorizedError
from app.db.postgres import execute_one, execute_raw_sql
from app.helpers.sql import bind_params, placeholder, require_fields, sql_for_partial_update

logger = logging.getLogger(__name__)

JS_TO_SQL = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}

MUTABLE_FIELDS = {"firstName", "lastName", "password", "email", "isAdmin"}

COLUMNS = ('username, first_name AS "firstName", last_name AS "lastName", '
           'email, is_admin AS "isAdmin"')


def authenticate(db: Session, username: str, password: str) -> dict:
    """
    Check username/password and return the user.

    Raises UnauthorizedError if the user is missing or the password is wrong.
    """
    user = execute_one(
        db,
        f"SELECT {COLUMNS}, password FROM users WHERE username = :p1",
        bind_params([username]),
    )
    if user and verify_password(password, user.pop("password")):
        return user

    raise UnauthorizedError("Invalid username/password")


def create(db: Session, data: Dict[str, Any]) -> dict:
    """
    Register a user and return it (without password).

    data should be {username, password, firstName, lastName, email, isAdmin}

    Raises BadRequestError if a required field is missing,
    ConflictError on a duplicate username.
    """
    require_fields(data, "username", "password", "firstName", "lastName", "email")
    username = data["username"]
    duplicate = execute_one(
        db, "SELECT username FROM users WHERE username = :p1", bind_params([username])
    )
    if duplicate:
        raise ConflictError(f"Duplicate username: {username}")

    user = execute_one(
        db,
        f"""INSERT INTO users
                (username, password, first_name, last_name, email, is_admin)
            VALUES (:p1, :p2, :p3, :p4, :p5, :p6)
            RETURNING {COLUMNS}""",
        bind_params([
            username,
            hash_password(data["password"]),
            data["firstName"],
            data["lastName"],
            data["email"],
            bool(data.get("isAdmin", False)),
        ]),
    )
    logger.info("Registered user %s", username)
    return user


def find_all(db: Session) -> List[dict]:
    """Find all users, ordered by username."""
    return execute_raw_sql(db, f"SELECT {COLUMNS} FROM users ORDER BY username")


def get(db: Session, username: str) -> dict:
    """
    Return a user with the ids of the jobs they applied to.

    Returns {username, firstName, lastName, email, isAdmin, jobs}

    Raises NotFoundError if not found.
    """
    user = execute_one(
        db, f"SELECT {COLUMNS} FROM users WHERE username = :p1", bind_params([username])
    )
    if not user:
        raise NotFoundError(f"No user: {username}")

    applications = execute_raw_sql(
        db,
        "SELECT job_id FROM applications WHERE username = :p1 ORDER BY job_id",
        bind_params([username]),
    )
    user["jobs"] = [a["job_id"] for a in applications]
    return user


def update(db: Session, username: str, data: Dict[str, Any]) -> dict:
    """
    Partial update of firstName, lastName, password, email and/or isAdmin.
    A supplied password is hashed before it is stored.

    Raises BadRequestError for no data or an immutable field,
    NotFoundError if the user does not exist.
    """
    immutable = sorted(set(data) - MUTABLE_FIELDS)
    if immutable:
        raise BadRequestError(f"Cannot update: {', '.join(immutable)}")

    data = dict(data)
    if "password" in data:
        data["password"] = hash_password(data["password"])

    set_cols, values = sql_for_partial_update(data, JS_TO_SQL)
    user = execute_one(
        db,
        f"""UPDATE users
            SET {set_cols}
            WHERE username = {placeholder(len(values) + 1)}
            RETURNING {COLUMNS}""",
        bind_params([*values, username]),
    )
    if not user:
        raise NotFoundError(f"No user: {username}")
    return user


def remove(db: Session, username: str) -> None:
    """Delete a user. Raises NotFoundError if not found."""
    deleted = execute_one(
        db, "DELETE FROM users WHERE username = :p1 RETURNING username", bind_params([username])
    )
    if not deleted:
        raise NotFoundError(f"No user: {username}")
    logger.info("Removed user %s", username)


def apply_to_job(db: Session, username: str, job_id: int) -> None:
    """
    Record that a user applied to a job.

    Raises NotFoundError if the job or user is missing,
    ConflictError if the user already applied.
    """
    job = execute_one(db, "SELECT id FROM jobs WHERE id = :p1", bind_params([job_id]))
    if not job:
        raise NotFoundError(f"No job: {job_id}")

    user = execute_one(
        db, "SELECT username FROM users WHERE username = :p1", bind_params([username])
    )
    if not user:
        raise NotFoundError(f"No user: {username}")

    existing = execute_one(
        db,
        "SELECT job_id FROM applications WHERE username = :p1 AND job_id = :p2",
        bind_params([username, job_id]),
    )
    if existing:
        raise ConflictError(f"{username} already applied to job {job_id}")

    db.execute(
        text("INSERT INTO applications (username, job_id) VALUES (:p1, :p2)"),
        bind_params([username, job_id]),
    )
    logger.info("User %s applied to job %s", username, job_id)
