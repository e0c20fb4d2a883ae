"""Auth service — login and profile lookup."""

import logging
from typing import Dict, Any

from sqlalchemy.orm import Session

from rbac_admin.models.user import User
from rbac_admin.core.security import verify_password, create_access_token
from rbac_admin.core.exceptions import AuthenticationError
from rbac_admin.services.permission_service import permission_service
from rbac_admin.services.user_service import user_service

logger = logging.getLogger("rbac_admin.auth")


def _role_code(user: User):
    return user.role.code if user.role else None


class AuthService:
    """Handles authentication."""

    @staticmethod
    def authenticate(db: Session, username: str, password: str) -> Dict[str, Any]:
        """Authenticate a user and issue a JWT.

        Raises:
            AuthenticationError: If credentials are invalid or the account
                is disabled.
        """
        user = user_service.get_by_username(db, username)
        if not user or not verify_password(password, user.hashed_password):
            logger.warning("Failed login for username=%s", username)
            raise AuthenticationError("Invalid username or password")

        if not user.is_active:
            logger.warning("Login refused for disabled user=%s", username)
            raise AuthenticationError("Account is disabled")

        token = create_access_token(user.id, user.username)
        logger.info("User %s logged in", user.username)

        return {
            "token": token,
            "user": {
                "id": user.id,
                "username": user.username,
                "realname": user.realname,
                "email": user.email,
                "role": _role_code(user),
            },
        }

    @staticmethod
    def get_profile(db: Session, user_id: int) -> Dict[str, Any]:
        """Profile of the token's user, including granted permission codes."""
        user = user_service.get(db, user_id)
        return {
            "id": user.id,
            "username": user.username,
            "realname": user.realname,
            "email": user.email,
            "phone": user.phone,
            "avatar": user.avatar,
            "status": user.status,
            "role": _role_code(user),
            "permissions": permission_service.get_user_permission_codes(db, user.id),
        }


auth_service = AuthService()
