import logging

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, Session
from contextlib import contextmanager
from app.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Create engine with connection pool
# pool_size=5: maintain 5 connections ready
# max_overflow=10: allow 10 extra connections under load
engine = create_engine(
    settings.postgres_url,
    pool_size=5,
    max_overflow=10,
    pool_pre_ping=True,
    echo=settings.debug  # Log SQL queries in debug mode
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def get_db_session():
    """
    Context manager for database sessions.
    Usage:
        with get_db_session() as db:
            db.execute(text("SELECT * FROM users"))
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_db():
    """
    Dependency for FastAPI route injection. One session per request,
    committed when the handler returns, rolled back when it raises.
    Usage:
        @app.get("/users")
        def get_users(db: Session = Depends(get_db)):
            ...
    """
    with get_db_session() as db:
        yield db


def test_postgres_connection() -> bool:
    """
    Test if PostgreSQL is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        with get_db_session() as db:
            result = db.execute(text("SELECT 1 as test"))
            row = result.fetchone()
            return row[0] == 1
    except Exception as e:
        logger.error("PostgreSQL connection failed: %s", e)
        return False


def execute_raw_sql(db: Session, sql: str, params: dict = None) -> list:
    """
    Execute raw SQL on the given session and return results as list of dicts.
    """
    result = db.execute(text(sql), params or {})
    # Convert rows to dicts
    columns = result.keys()
    return [dict(zip(columns, row)) for row in result.fetchall()]


def execute_one(db: Session, sql: str, params: dict = None):
    """Like execute_raw_sql but returns the first row as a dict, or None."""
    rows = execute_raw_sql(db, sql, params)
    return rows[0] if rows else None
