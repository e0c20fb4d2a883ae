"""Role model for RBAC."""

from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from rbac_admin.db.base import Base
from rbac_admin.models.associations import role_permissions


class Role(Base):
    """Named role aggregating a set of permissions."""
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False)
    code = Column(String(50), unique=True, nullable=False, index=True)
    description = Column(String(255), nullable=True, default="")
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    permissions = relationship(
        "Permission",
        secondary=role_permissions,
        back_populates="roles",
        lazy="selectin",
    )
    users = relationship("User", back_populates="role")
