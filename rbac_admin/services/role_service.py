"""Role service — list, get, create, update, delete."""

import logging
from typing import Optional, Dict, Any

from sqlalchemy.orm import Session

from rbac_admin.models.role import Role
from rbac_admin.models.user import User
from rbac_admin.core.exceptions import ResourceNotFoundError, ResourceConflictError

logger = logging.getLogger("rbac_admin.roles")

UPDATABLE_FIELDS = ("name", "code", "description")
# Blank values for these are ignored; other fields may be cleared with ""
REQUIRED_FIELDS = ("name", "code")


class RoleService:
    """Manages roles."""

    @staticmethod
    def list_roles(db: Session, page: int = 1, page_size: int = 10) -> Dict[str, Any]:
        """List roles with pagination."""
        total = db.query(Role).count()
        roles = (
            db.query(Role)
            .order_by(Role.id.asc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )
        return {"roles": roles, "total": total, "page": page, "page_size": page_size}

    @staticmethod
    def get(db: Session, role_id: int) -> Role:
        role = db.query(Role).filter(Role.id == role_id).first()
        if not role:
            raise ResourceNotFoundError(f"Role {role_id} not found")
        return role

    @staticmethod
    def get_by_code(db: Session, code: str) -> Optional[Role]:
        return db.query(Role).filter(Role.code == code).first()

    @staticmethod
    def create(db: Session, name: str, code: str, description: str = "") -> Role:
        """Create a role.

        Raises:
            ResourceConflictError: If the code is taken.
        """
        if RoleService.get_by_code(db, code):
            raise ResourceConflictError(f"Role code '{code}' already exists")

        role = Role(name=name, code=code, description=description or "")
        db.add(role)
        db.commit()
        db.refresh(role)
        logger.info("Created role %s (%s)", role.id, role.code)
        return role

    @staticmethod
    def update(db: Session, role_id: int, updates: Dict[str, Any]) -> Role:
        """Apply a partial field map; None is ignored, as is a blank name or code."""
        role = RoleService.get(db, role_id)

        new_code = updates.get("code")
        if new_code and new_code != role.code:
            conflict = db.query(Role).filter(Role.code == new_code, Role.id != role_id).first()
            if conflict:
                raise ResourceConflictError(f"Role code '{new_code}' already exists")

        for key, value in updates.items():
            if key not in UPDATABLE_FIELDS or value is None:
                continue
            if key in REQUIRED_FIELDS and value == "":
                continue
            setattr(role, key, value)
        db.commit()
        db.refresh(role)
        logger.info("Updated role %s fields=%s", role_id, sorted(updates))
        return role

    @staticmethod
    def delete(db: Session, role_id: int) -> None:
        """Hard-delete a role.

        Its permission links are cleared first and users holding the role are
        left without one. The permissions themselves are kept.
        """
        role = RoleService.get(db, role_id)
        try:
            role.permissions.clear()
            db.query(User).filter(User.role_id == role_id).update(
                {"role_id": None}, synchronize_session="fetch"
            )
            db.delete(role)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info("Deleted role %s", role_id)


role_service = RoleService()
