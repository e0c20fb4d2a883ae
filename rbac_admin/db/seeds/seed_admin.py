"""Seed the default admin user from settings."""

import logging

from sqlalchemy.orm import Session
from rbac_admin.models.user import User, STATUS_ENABLED
from rbac_admin.models.role import Role
from rbac_admin.core.security import hash_password
from rbac_admin.core.config import settings
from rbac_admin.db.seeds.seed_permissions import ADMIN_ROLE_CODE

logger = logging.getLogger("rbac_admin.seed")


def seed_admin(db: Session) -> None:
    """Create the admin user if not already present."""
    existing = db.query(User).filter(User.username == settings.DEFAULT_ADMIN_USERNAME).first()
    if existing:
        logger.info("ℹ️  Admin '%s' already exists, skipping.", settings.DEFAULT_ADMIN_USERNAME)
        return

    admin_role = db.query(Role).filter(Role.code == ADMIN_ROLE_CODE).first()
    admin = User(
        username=settings.DEFAULT_ADMIN_USERNAME,
        hashed_password=hash_password(settings.DEFAULT_ADMIN_PASSWORD),
        realname="Administrator",
        email=settings.DEFAULT_ADMIN_EMAIL,
        status=STATUS_ENABLED,
        role_id=admin_role.id if admin_role else None,
    )
    db.add(admin)
    db.commit()
    logger.info("✅ Created admin user: %s", settings.DEFAULT_ADMIN_USERNAME)
