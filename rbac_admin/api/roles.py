"""Roles API router, including role permission assignment."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from rbac_admin.db.session import get_db
from rbac_admin.schemas.schemas import (
    MAX_SQL_INT, RoleCreate, RoleUpdate, RoleOut, RoleDetail, AssignPermissionsRequest,
)
from rbac_admin.services.role_service import role_service
from rbac_admin.services.permission_service import permission_service
from rbac_admin.core.security import get_current_user_id, require_permission_assign
from rbac_admin.core.response import success, page_data
from rbac_admin.api.deps import Pagination, get_pagination

router = APIRouter(prefix="/roles", tags=["roles"])


@router.get("")
async def list_roles(
    paging: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """List roles."""
    result = role_service.list_roles(db, paging.page, paging.page_size)
    return success(page_data(
        [RoleOut.model_validate(r) for r in result["roles"]],
        result["total"], result["page"], result["page_size"],
    ))


@router.post("")
async def create_role(
    body: RoleCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """Create a role."""
    role = role_service.create(db, body.name, body.code, body.description)
    return success(RoleOut.model_validate(role))


@router.get("/{role_id}")
async def get_role(
    role_id: int = Path(..., le=MAX_SQL_INT),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """Get a role with its permissions."""
    return success(RoleDetail.model_validate(role_service.get(db, role_id)))


@router.put("/{role_id}")
async def update_role(
    role_id: Annotated[int, Path(le=MAX_SQL_INT)],
    body: RoleUpdate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """Update the supplied fields of a role."""
    role = role_service.update(db, role_id, body.model_dump(exclude_unset=True))
    return success(RoleOut.model_validate(role))


@router.delete("/{role_id}")
async def delete_role(
    role_id: int = Path(..., le=MAX_SQL_INT),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """Delete a role; its permissions are kept."""
    role_service.delete(db, role_id)
    return success()


@router.get("/{role_id}/permissions")
async def get_role_permissions(
    role_id: int = Path(..., le=MAX_SQL_INT),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """Permission tree with the role's grants marked as checked."""
    return success(permission_service.get_role_permission_data(db, role_id))


@router.post("/{role_id}/permissions")
async def assign_role_permissions(
    role_id: Annotated[int, Path(le=MAX_SQL_INT)],
    body: AssignPermissionsRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(require_permission_assign),
):
    """Replace the role's permission set."""
    permission_service.assign_to_role(db, role_id, body.permission_ids)
    return success()
