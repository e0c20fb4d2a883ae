"""Users API router."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from rbac_admin.db.session import get_db
from rbac_admin.schemas.schemas import MAX_SQL_INT, UserCreate, UserUpdate, UserOut, BatchDeleteRequest
from rbac_admin.services.user_service import user_service
from rbac_admin.core.security import get_current_user_id
from rbac_admin.core.response import success, page_data
from rbac_admin.api.deps import Pagination, get_pagination

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
async def list_users(
    keyword: Optional[str] = Query(None),
    status: Optional[int] = Query(None, ge=-MAX_SQL_INT - 1, le=MAX_SQL_INT),
    paging: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """List users."""
    result = user_service.list_users(db, paging.page, paging.page_size, keyword, status)
    return success(page_data(
        [UserOut.model_validate(u) for u in result["users"]],
        result["total"], result["page"], result["page_size"],
    ))


@router.post("")
async def create_user(
    body: UserCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """Create a user."""
    user = user_service.create(db, **body.model_dump())
    return success(UserOut.model_validate(user))


@router.post("/batch-delete")
async def batch_delete_users(
    body: BatchDeleteRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """Delete several users at once."""
    deleted = user_service.batch_delete(db, body.ids, acting_user_id=user_id)
    return success({"deleted": deleted})


@router.get("/{target_id}")
async def get_user(
    target_id: int = Path(..., le=MAX_SQL_INT),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """Get a user."""
    return success(UserOut.model_validate(user_service.get(db, target_id)))


@router.put("/{target_id}")
async def update_user(
    target_id: Annotated[int, Path(le=MAX_SQL_INT)],
    body: UserUpdate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """Update the supplied fields of a user."""
    user = user_service.update(db, target_id, body.model_dump(exclude_unset=True))
    return success(UserOut.model_validate(user))


@router.delete("/{target_id}")
async def delete_user(
    target_id: int = Path(..., le=MAX_SQL_INT),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """Delete a user."""
    user_service.delete(db, target_id, acting_user_id=user_id)
    return success()
