"""Seed the default permission tree and grant it to the admin role."""

import logging

from sqlalchemy.orm import Session
from rbac_admin.models.permission import Permission
from rbac_admin.models.role import Role

logger = logging.getLogger("rbac_admin.seed")

# (name, code, parent_code, path, type, sort, description)
DEFAULT_PERMISSIONS = [
    ("System", "system", "", "/system", 1, 0, "System management module"),
    ("Users", "system:user", "system", "/system/user", 1, 1, "User management"),
    ("Roles", "system:role", "system", "/system/role", 1, 2, "Role management"),
    ("Permissions", "system:permission", "system", "/system/permission", 1, 3, "Permission management"),

    ("View users", "system:user:view", "system:user", "", 2, 1, "View the user list"),
    ("Add users", "system:user:add", "system:user", "", 2, 2, "Create users"),
    ("Edit users", "system:user:edit", "system:user", "", 2, 3, "Edit users"),
    ("Delete users", "system:user:delete", "system:user", "", 2, 4, "Delete users"),

    ("View roles", "system:role:view", "system:role", "", 2, 1, "View the role list"),
    ("Add roles", "system:role:add", "system:role", "", 2, 2, "Create roles"),
    ("Edit roles", "system:role:edit", "system:role", "", 2, 3, "Edit roles"),
    ("Delete roles", "system:role:delete", "system:role", "", 2, 4, "Delete roles"),

    ("View permissions", "system:permission:view", "system:permission", "", 2, 1, "View the permission list"),
    ("Assign permissions", "system:permission:assign", "system:permission", "", 2, 2, "Assign permissions to roles"),

    ("Dashboard", "dashboard", "", "/dashboard", 1, 0, "Dashboard module"),
]

ADMIN_ROLE_CODE = "admin"


def seed_permissions(db: Session) -> None:
    """Insert missing default permissions and grant all of them to the admin role."""
    created = 0
    defaults = []
    for name, code, parent_code, path, type_, sort, description in DEFAULT_PERMISSIONS:
        permission = db.query(Permission).filter(Permission.code == code).first()
        if not permission:
            permission = Permission(
                name=name, code=code, parent_code=parent_code, path=path,
                type=type_, sort=sort, description=description,
            )
            db.add(permission)
            created += 1
        defaults.append(permission)
    db.flush()

    admin_role = db.query(Role).filter(Role.code == ADMIN_ROLE_CODE).first()
    if not admin_role:
        logger.warning("⚠️  '%s' role not found, permissions left unassigned", ADMIN_ROLE_CODE)
    else:
        granted = {p.id for p in admin_role.permissions}
        for permission in defaults:
            if permission.id not in granted:
                admin_role.permissions.append(permission)

    db.commit()
    logger.info("✅ Seeded %d of %d default permissions", created, len(DEFAULT_PERMISSIONS))
