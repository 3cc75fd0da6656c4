"""
Table definitions.

Queries are written as raw SQL in app.models; this MetaData only exists so
the schema can be created on PostgreSQL and on the SQLite test database from
one declaration.
"""

from sqlalchemy import (
    Boolean, CheckConstraint, Column, ForeignKey, Integer, MetaData,
    Numeric, String, Table, Text,
)
from sqlalchemy.engine import Engine

metadata = MetaData()

companies = Table(
    "companies", metadata,
    Column("handle", String(25), primary_key=True),
    Column("name", Text, unique=True, nullable=False),
    Column("num_employees", Integer, CheckConstraint("num_employees >= 0")),
    Column("description", Text),
    Column("logo_url", Text),
)

jobs = Table(
    "jobs", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", Text, nullable=False),
    Column("salary", Integer, CheckConstraint("salary >= 0")),
    Column("equity", Numeric, CheckConstraint("equity >= 0 AND equity <= 1.0")),
    Column("company_handle", String(25),
           ForeignKey("companies.handle", ondelete="CASCADE"), nullable=False),
)

users = Table(
    "users", metadata,
    Column("username", String(25), primary_key=True),
    Column("password", Text, nullable=False),
    Column("first_name", Text, nullable=False),
    Column("last_name", Text, nullable=False),
    Column("email", Text, nullable=False),
    Column("is_admin", Boolean, nullable=False),
)

applications = Table(
    "applications", metadata,
    Column("username", String(25),
           ForeignKey("users.username", ondelete="CASCADE"), primary_key=True),
    Column("job_id", Integer,
           ForeignKey("jobs.id", ondelete="CASCADE"), primary_key=True),
)


def init_schema(engine: Engine) -> None:
    """Create any missing tables."""
    metadata.create_all(bind=engine)


def drop_schema(engine: Engine) -> None:
    metadata.drop_all(bind=engine)
