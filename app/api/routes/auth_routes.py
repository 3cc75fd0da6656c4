"""
Authentication Routes

POST /auth/token - Login and get JWT token
POST /auth/register - Register new (non-admin) user and get JWT token
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.postgres import get_db
from app.core.auth import create_token
from app.models import user as user_model
from app.schemas.schemas import RegisterRequest, TokenRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/token", response_model=TokenResponse)
async def login(request: TokenRequest, db: Session = Depends(get_db)):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    user = user_model.authenticate(db, request.username, request.password)
    return TokenResponse(token=create_token(user))


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """Register a new user account. Self-registered users are never admins."""
    data = request.model_dump(by_alias=True)
    data["isAdmin"] = False
    user = user_model.create(db, data)
    return TokenResponse(token=create_token(user))
