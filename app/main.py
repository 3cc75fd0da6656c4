"""
Jobly API - Main Application

FastAPI backend with:
- PostgreSQL for companies, jobs, users and applications
- JWT authentication; writes are admin-only

Run: uvicorn app.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import api_router
from app.api.error_handlers import register_error_handlers
from app.core.config import get_settings
from app.core.logging_config import setup_logging

settings = get_settings()

setup_logging(settings.log_level, settings.json_logs)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Jobly",
    description="""
    Job board API.

    ## Features
    - **Authentication**: JWT bearer tokens from /auth/token or /auth/register
    - **Companies**: CRUD, filter by size and name
    - **Jobs**: CRUD, filter by title, minimum salary and equity
    - **Users**: CRUD and job applications
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include API routes
app.include_router(api_router)


# Startup event
@app.on_event("startup")
async def startup_event():
    """Create missing tables when AUTO_CREATE_SCHEMA is set."""
    if settings.auto_create_schema:
        from app.db.postgres import engine
        from app.db.tables import init_schema

        init_schema(engine)
        logger.info("Database schema initialized")


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    from app.db.postgres import test_postgres_connection

    return {
        "status": "healthy",
        "postgres": "connected" if test_postgres_connection() else "disconnected",
    }
