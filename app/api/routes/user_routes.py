"""
User Routes

POST /users - Create user, possibly an admin (admin only)
GET /users - List users (admin only)
GET /users/{username} - Get user and applied job ids (admin or same user)
PATCH /users/{username} - Partial update (admin or same user)
DELETE /users/{username} - Delete user (admin or same user)
POST /users/{username}/jobs/{job_id} - Apply to job (admin or same user)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.postgres import get_db
from app.core.auth import create_token, ensure_admin, ensure_correct_user_or_admin
from app.core.errors import UnauthorizedError
from app.models import user as user_model
from app.schemas.schemas import (
    UserCreate, UserUpdate, UserCreatedResponse, UserResponse, UserDetailResponse,
    UserListResponse, ApplicationResponse, DeletedResponse
)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", response_model=UserCreatedResponse, status_code=201)
async def create_user(data: UserCreate, admin: dict = Depends(ensure_admin), db: Session = Depends(get_db)):
    """Add a user and return it with a token for it. Admins only."""
    user = user_model.create(db, data.model_dump(by_alias=True))
    return UserCreatedResponse(user=user, token=create_token(user))


@router.get("", response_model=UserListResponse)
async def list_users(admin: dict = Depends(ensure_admin), db: Session = Depends(get_db)):
    return UserListResponse(users=user_model.find_all(db))


@router.get("/{username}", response_model=UserDetailResponse)
async def get_user(username: str, user: dict = Depends(ensure_correct_user_or_admin), db: Session = Depends(get_db)):
    return UserDetailResponse(user=user_model.get(db, username))


@router.patch("/{username}", response_model=UserResponse)
async def update_user(
    username: str,
    update: UserUpdate,
    user: dict = Depends(ensure_correct_user_or_admin),
    db: Session = Depends(get_db)
):
    """Update some of firstName, lastName, password, email, isAdmin.

    Only admins may change isAdmin.
    """
    changes = update.changes()
    if "isAdmin" in changes and not user["isAdmin"]:
        raise UnauthorizedError()
    return UserResponse(user=user_model.update(db, username, changes))


@router.delete("/{username}", response_model=DeletedResponse)
async def delete_user(username: str, user: dict = Depends(ensure_correct_user_or_admin), db: Session = Depends(get_db)):
    user_model.remove(db, username)
    return DeletedResponse(deleted=username)


@router.post("/{username}/jobs/{job_id}", response_model=ApplicationResponse)
async def apply_to_job(
    username: str,
    job_id: int,
    user: dict = Depends(ensure_correct_user_or_admin),
    db: Session = Depends(get_db)
):
    """Apply to a job. Cannot apply twice to same job."""
    user_model.apply_to_job(db, username, job_id)
    return ApplicationResponse(applied=job_id)
