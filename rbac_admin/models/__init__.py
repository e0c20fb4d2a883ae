"""Models package — import all models so create_all can discover them."""

from rbac_admin.models.associations import role_permissions
from rbac_admin.models.role import Role
from rbac_admin.models.permission import Permission, PermissionType
from rbac_admin.models.user import User

__all__ = [
    "role_permissions", "Role", "Permission", "PermissionType", "User",
]
