"""Seed default roles into the database."""

import logging

from sqlalchemy.orm import Session
from rbac_admin.models.role import Role

logger = logging.getLogger("rbac_admin.seed")

DEFAULT_ROLES = [
    {"name": "Super Administrator", "code": "admin", "description": "Full access to the admin console"},
    {"name": "User", "code": "user", "description": "Regular user"},
]


def seed_roles(db: Session) -> None:
    """Insert default roles if their codes don't already exist."""
    created = 0
    for role_data in DEFAULT_ROLES:
        existing = db.query(Role).filter(Role.code == role_data["code"]).first()
        if not existing:
            db.add(Role(**role_data))
            created += 1

    db.commit()
    logger.info("✅ Seeded %d of %d default roles", created, len(DEFAULT_ROLES))
