"""Permission service — CRUD, role assignment, tree assembly, checks."""

import logging
from typing import Optional, List, Dict, Any

from sqlalchemy.orm import Session

from rbac_admin.models.permission import Permission
from rbac_admin.models.role import Role
from rbac_admin.models.user import User
from rbac_admin.schemas.schemas import PermissionTreeNode, RolePermissionData
from rbac_admin.services.permission_tree import build_permission_tree
from rbac_admin.core.exceptions import ResourceNotFoundError, ResourceConflictError

logger = logging.getLogger("rbac_admin.permissions")

UPDATABLE_FIELDS = ("name", "code", "parent_code", "path", "type", "sort", "description")
# Blank values for these are ignored; other fields may be cleared with ""
REQUIRED_FIELDS = ("name", "code")


class PermissionService:
    """Manages permissions and their assignment to roles."""

    @staticmethod
    def list_all(db: Session) -> List[Permission]:
        """All permissions ordered by (type, sort, id)."""
        return (
            db.query(Permission)
            .order_by(Permission.type.asc(), Permission.sort.asc(), Permission.id.asc())
            .all()
        )

    @staticmethod
    def get(db: Session, permission_id: int) -> Permission:
        permission = db.query(Permission).filter(Permission.id == permission_id).first()
        if not permission:
            raise ResourceNotFoundError(f"Permission {permission_id} not found")
        return permission

    @staticmethod
    def get_by_code(db: Session, code: str) -> Optional[Permission]:
        return db.query(Permission).filter(Permission.code == code).first()

    @staticmethod
    def get_tree(db: Session) -> List[PermissionTreeNode]:
        """Permission tree built from every row."""
        return build_permission_tree(PermissionService.list_all(db))

    @staticmethod
    def create(
        db: Session,
        name: str,
        code: str,
        parent_code: str = "",
        path: str = "",
        type: int = 1,
        sort: int = 0,
        description: str = "",
    ) -> Permission:
        """Create a permission.

        Raises:
            ResourceConflictError: If the code is taken.
        """
        if PermissionService.get_by_code(db, code):
            raise ResourceConflictError(f"Permission with code '{code}' already exists")

        permission = Permission(
            name=name,
            code=code,
            parent_code=parent_code or "",
            path=path or "",
            type=type,
            sort=sort,
            description=description or "",
        )
        db.add(permission)
        db.commit()
        db.refresh(permission)
        logger.info("Created permission %s (%s)", permission.id, permission.code)
        return permission

    @staticmethod
    def update(db: Session, permission_id: int, updates: Dict[str, Any]) -> Permission:
        """Apply a partial field map; None is ignored, as is a blank name or code."""
        permission = PermissionService.get(db, permission_id)

        new_code = updates.get("code")
        if new_code and new_code != permission.code:
            conflict = (
                db.query(Permission)
                .filter(Permission.code == new_code, Permission.id != permission_id)
                .first()
            )
            if conflict:
                raise ResourceConflictError(f"Permission with code '{new_code}' already exists")

        for key, value in updates.items():
            if key not in UPDATABLE_FIELDS or value is None:
                continue
            if key in REQUIRED_FIELDS and value == "":
                continue
            setattr(permission, key, value)
        db.commit()
        db.refresh(permission)
        logger.info("Updated permission %s fields=%s", permission_id, sorted(updates))
        return permission

    @staticmethod
    def delete(db: Session, permission_id: int) -> None:
        """Remove a permission and its role links in a single transaction."""
        try:
            permission = PermissionService.get(db, permission_id)
            permission.roles.clear()
            db.flush()
            db.delete(permission)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info("Deleted permission %s", permission_id)

    @staticmethod
    def get_role_permissions(db: Session, role_id: int) -> List[Permission]:
        role = db.query(Role).filter(Role.id == role_id).first()
        if not role:
            raise ResourceNotFoundError(f"Role {role_id} not found")
        return list(role.permissions)

    @staticmethod
    def assign_to_role(db: Session, role_id: int, permission_ids: List[int]) -> Role:
        """Replace a role's permissions with exactly ``permission_ids``.

        Raises:
            ResourceNotFoundError: If the role or any permission id is unknown.
                Nothing is changed in that case.
        """
        role = db.query(Role).filter(Role.id == role_id).first()
        if not role:
            raise ResourceNotFoundError(f"Role {role_id} not found")

        wanted = set(permission_ids)
        permissions = []
        if wanted:
            permissions = db.query(Permission).filter(Permission.id.in_(wanted)).all()
            missing = wanted - {p.id for p in permissions}
            if missing:
                raise ResourceNotFoundError(
                    f"Permissions not found: {', '.join(str(i) for i in sorted(missing))}"
                )

        role.permissions = permissions
        db.commit()
        db.refresh(role)
        logger.info("Assigned %d permissions to role %s", len(permissions), role.code)
        return role

    @staticmethod
    def get_role_permission_data(db: Session, role_id: int) -> RolePermissionData:
        """Full tree with the role's permissions flagged as checked."""
        granted = PermissionService.get_role_permissions(db, role_id)
        granted_ids = {p.id for p in granted}
        trees = build_permission_tree(PermissionService.list_all(db), checked_ids=granted_ids)
        return RolePermissionData(
            role_id=role_id,
            permission_ids=sorted(granted_ids),
            permission_trees=trees,
        )

    @staticmethod
    def get_user_permission_codes(db: Session, user_id: int) -> List[str]:
        """Codes granted to the user through their role."""
        user = db.query(User).filter(User.id == user_id).first()
        if not user or not user.role:
            return []
        return sorted(p.code for p in user.role.permissions)

    @staticmethod
    def check_permission(db: Session, user_id: int, code: str) -> bool:
        return code in PermissionService.get_user_permission_codes(db, user_id)


permission_service = PermissionService()
