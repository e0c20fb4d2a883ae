"""Permissions API router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from rbac_admin.db.session import get_db
from rbac_admin.schemas.schemas import MAX_SQL_INT, PermissionCreate, PermissionUpdate, PermissionOut
from rbac_admin.services.permission_service import permission_service
from rbac_admin.core.security import get_current_user_id, require_permission_assign
from rbac_admin.core.response import success

router = APIRouter(prefix="/permissions", tags=["permissions"])


@router.get("")
async def list_permissions(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """All permissions, ordered by type, sort and id."""
    permissions = [PermissionOut.model_validate(p) for p in permission_service.list_all(db)]
    return success({"list": permissions, "total": len(permissions)})


@router.get("/tree")
async def get_permission_tree(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """Permissions nested by parent_code."""
    return success(permission_service.get_tree(db))


@router.get("/{permission_id}")
async def get_permission(
    permission_id: int = Path(..., le=MAX_SQL_INT),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    return success(PermissionOut.model_validate(permission_service.get(db, permission_id)))


@router.post("")
async def create_permission(
    body: PermissionCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(require_permission_assign),
):
    """Create a permission."""
    permission = permission_service.create(db, **body.model_dump())
    return success(PermissionOut.model_validate(permission))


@router.put("/{permission_id}")
async def update_permission(
    permission_id: Annotated[int, Path(le=MAX_SQL_INT)],
    body: PermissionUpdate,
    db: Session = Depends(get_db),
    user_id: int = Depends(require_permission_assign),
):
    """Update the supplied fields of a permission."""
    permission = permission_service.update(db, permission_id, body.model_dump(exclude_unset=True))
    return success(PermissionOut.model_validate(permission))


@router.delete("/{permission_id}")
async def delete_permission(
    permission_id: int = Path(..., le=MAX_SQL_INT),
    db: Session = Depends(get_db),
    user_id: int = Depends(require_permission_assign),
):
    """Delete a permission and detach it from every role."""
    permission_service.delete(db, permission_id)
    return success()
