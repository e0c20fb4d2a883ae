"""Dashboard API router."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rbac_admin.db.session import get_db
from rbac_admin.schemas.schemas import DashboardStats
from rbac_admin.models.user import User, STATUS_ENABLED
from rbac_admin.models.role import Role
from rbac_admin.models.permission import Permission
from rbac_admin.core.security import get_current_user_id
from rbac_admin.core.response import success

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats")
async def dashboard_stats(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """Counts shown on the dashboard cards."""
    total_users = db.query(User).count()
    active_users = db.query(User).filter(User.status == STATUS_ENABLED).count()
    return success(DashboardStats(
        total_users=total_users,
        active_users=active_users,
        disabled_users=total_users - active_users,
        total_roles=db.query(Role).count(),
        total_permissions=db.query(Permission).count(),
    ))
