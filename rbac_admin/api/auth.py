"""Auth API router — login, logout, profile."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rbac_admin.db.session import get_db
from rbac_admin.schemas.schemas import LoginRequest
from rbac_admin.services.auth_service import auth_service
from rbac_admin.core.security import get_current_user_id
from rbac_admin.core.response import success

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
async def login(body: LoginRequest, db: Session = Depends(get_db)):
    """Authenticate and return a JWT."""
    return success(auth_service.authenticate(db, body.username, body.password))


@router.post("/logout")
async def logout(user_id: int = Depends(get_current_user_id)):
    """Nothing to revoke server-side; the client discards its token."""
    return success()


@router.get("/profile")
async def get_profile(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """Get current user profile."""
    return success(auth_service.get_profile(db, user_id))
