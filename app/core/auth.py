"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- FastAPI dependencies for protected routes

Tokens carry {"username", "isAdmin"}; the principal is taken from the token
alone, no database lookup.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.config import get_settings
from app.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_work_factor,
)

# Bearer token extractor; a missing header is an anonymous request, not an error
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_token(user: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT for a user record ({username, isAdmin, ...})."""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    payload = {
        "username": user["username"],
        "isAdmin": bool(user.get("isAdmin", False)),
        "exp": expire,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[dict]:
    """
    FastAPI dependency - principal from the bearer token, or None.

    An invalid token is treated like a missing one; the route-level
    dependencies below decide whether anonymous access is allowed.
    """
    if credentials is None:
        return None

    payload = decode_token(credentials.credentials)
    if not payload or "username" not in payload:
        logger.debug("Rejected bearer token")
        return None

    return {"username": payload["username"], "isAdmin": bool(payload.get("isAdmin"))}


async def ensure_logged_in(user: Optional[dict] = Depends(get_current_user)) -> dict:
    """Dependency - any authenticated user."""
    if not user:
        raise UnauthorizedError()
    return user


async def ensure_admin(user: dict = Depends(ensure_logged_in)) -> dict:
    """Dependency - admin users only."""
    if not user["isAdmin"]:
        raise UnauthorizedError()
    return user


async def ensure_correct_user_or_admin(username: str, user: dict = Depends(ensure_logged_in)) -> dict:
    """
    Dependency - admin, or the user named by the {username} path parameter.

    Usage:
        @router.get("/users/{username}")
        async def route(username: str, user: dict = Depends(ensure_correct_user_or_admin)):
            ...
    """
    if not (user["isAdmin"] or user["username"] == username):
        raise UnauthorizedError()
    return user
