"""User model."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from rbac_admin.db.base import Base

STATUS_DISABLED = 0
STATUS_ENABLED = 1


class User(Base):
    """Admin console user holding at most one role."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    realname = Column(String(50), nullable=True, default="")
    email = Column(String(100), nullable=True, default="")
    phone = Column(String(20), nullable=True)
    avatar = Column(String(500), nullable=True)
    status = Column(Integer, default=STATUS_ENABLED, nullable=False)
    role_id = Column(Integer, ForeignKey("roles.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    role = relationship("Role", back_populates="users", lazy="joined")

    @property
    def is_active(self) -> bool:
        return self.status == STATUS_ENABLED
