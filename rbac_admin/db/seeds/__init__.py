"""Default data seeding."""

import logging

from sqlalchemy.orm import Session

from rbac_admin.models.user import User
from rbac_admin.db.seeds.seed_roles import seed_roles
from rbac_admin.db.seeds.seed_permissions import seed_permissions
from rbac_admin.db.seeds.seed_admin import seed_admin

logger = logging.getLogger("rbac_admin.seed")


def seed_all(db: Session, force: bool = False) -> bool:
    """Seed roles, permissions and the admin user.

    Without ``force`` nothing happens once any user exists, so deleted
    defaults are not resurrected on restart. Returns True if seeding ran.
    """
    if not force and db.query(User).count() > 0:
        logger.debug("Users present, skipping default data")
        return False
    seed_roles(db)
    seed_permissions(db)
    seed_admin(db)
    return True
