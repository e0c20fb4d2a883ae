"""User service — list, get, create, update, delete."""

import logging
from typing import Optional, List, Dict, Any

from sqlalchemy import or_
from sqlalchemy.orm import Session

from rbac_admin.models.user import User, STATUS_ENABLED
from rbac_admin.models.role import Role
from rbac_admin.core.security import hash_password
from rbac_admin.core.exceptions import (
    ResourceNotFoundError, ResourceConflictError, ValidationError,
)

logger = logging.getLogger("rbac_admin.users")

# Columns that may be cleared by sending null
NULLABLE_FIELDS = ("phone", "avatar", "role_id")
UPDATABLE_FIELDS = ("username", "realname", "email", "status") + NULLABLE_FIELDS


class UserService:
    """Handles user management."""

    @staticmethod
    def list_users(
        db: Session,
        page: int = 1,
        page_size: int = 10,
        keyword: Optional[str] = None,
        status: Optional[int] = None,
    ) -> Dict[str, Any]:
        """List users with optional filters and pagination."""
        query = db.query(User)

        if keyword:
            like = f"%{keyword}%"
            query = query.filter(or_(
                User.username.ilike(like),
                User.realname.ilike(like),
                User.email.ilike(like),
            ))
        if status is not None:
            query = query.filter(User.status == status)

        total = query.count()
        users = (
            query.order_by(User.id.asc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )
        return {"users": users, "total": total, "page": page, "page_size": page_size}

    @staticmethod
    def get(db: Session, user_id: int) -> User:
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            raise ResourceNotFoundError(f"User {user_id} not found")
        return user

    @staticmethod
    def get_by_username(db: Session, username: str) -> Optional[User]:
        return db.query(User).filter(User.username == username).first()

    @staticmethod
    def _ensure_role(db: Session, role_id: Optional[int]) -> None:
        if role_id is None:
            return
        if not db.query(Role).filter(Role.id == role_id).first():
            raise ResourceNotFoundError(f"Role {role_id} not found")

    @staticmethod
    def create(
        db: Session,
        username: str,
        password: str,
        realname: str = "",
        email: str = "",
        phone: Optional[str] = None,
        avatar: Optional[str] = None,
        role_id: Optional[int] = None,
    ) -> User:
        """Create a new user with a bcrypt-hashed password.

        Raises:
            ResourceConflictError: If the username is taken.
            ResourceNotFoundError: If ``role_id`` names no role.
        """
        if UserService.get_by_username(db, username):
            raise ResourceConflictError(f"Username '{username}' already exists")
        UserService._ensure_role(db, role_id)

        user = User(
            username=username,
            hashed_password=hash_password(password),
            realname=realname,
            email=email,
            phone=phone,
            avatar=avatar,
            status=STATUS_ENABLED,
            role_id=role_id,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info("Created user %s (%s)", user.id, user.username)
        return user

    @staticmethod
    def update(db: Session, user_id: int, updates: Dict[str, Any]) -> User:
        """Apply a partial field map to a user.

        Empty strings and nulls are skipped, except for the nullable columns
        where null clears the value. A non-empty password is re-hashed.
        """
        user = UserService.get(db, user_id)

        new_username = updates.get("username")
        if new_username and new_username != user.username:
            if UserService.get_by_username(db, new_username):
                raise ResourceConflictError(f"Username '{new_username}' already exists")
        if "role_id" in updates:
            UserService._ensure_role(db, updates["role_id"])

        password = updates.get("password")
        if password:
            user.hashed_password = hash_password(password)

        for key, value in updates.items():
            if key not in UPDATABLE_FIELDS:
                continue
            if key in NULLABLE_FIELDS:
                setattr(user, key, value)
            elif value is not None and value != "":
                setattr(user, key, value)

        db.commit()
        db.refresh(user)
        logger.info("Updated user %s fields=%s", user_id, sorted(k for k in updates if k != "password"))
        return user

    @staticmethod
    def delete(db: Session, user_id: int, acting_user_id: Optional[int] = None) -> None:
        """Hard-delete a user. Users cannot delete themselves."""
        if acting_user_id is not None and user_id == acting_user_id:
            raise ValidationError("You cannot delete your own account")
        user = UserService.get(db, user_id)
        db.delete(user)
        db.commit()
        logger.info("Deleted user %s", user_id)

    @staticmethod
    def batch_delete(db: Session, user_ids: List[int], acting_user_id: Optional[int] = None) -> int:
        """Delete every existing user in ``user_ids``; returns how many went."""
        if acting_user_id is not None and acting_user_id in user_ids:
            raise ValidationError("You cannot delete your own account")
        deleted = (
            db.query(User)
            .filter(User.id.in_(set(user_ids)))
            .delete(synchronize_session="fetch")
        )
        db.commit()
        logger.info("Batch deleted %d users", deleted)
        return deleted


user_service = UserService()
