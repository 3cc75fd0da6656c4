"""
Jobly API
CRUD backend for companies, jobs and users.

Architecture:
- PostgreSQL: companies, jobs, users, applications (raw parameterized SQL)
- FastAPI: thin routes with JWT-gated writes
"""

__version__ = "1.0.0"
