"""Permission model. Permissions form a tree through parent_code."""

import enum

from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from rbac_admin.db.base import Base
from rbac_admin.models.associations import role_permissions


class PermissionType(int, enum.Enum):
    menu = 1
    function = 2
    button = 3


class Permission(Base):
    """A menu, function or button permission identified by its code."""
    __tablename__ = "permissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False)
    code = Column(String(50), unique=True, nullable=False, index=True)
    # Code of the parent permission; empty for roots. Not a foreign key.
    parent_code = Column(String(50), nullable=False, default="")
    path = Column(String(100), nullable=False, default="")
    type = Column(Integer, nullable=False, default=PermissionType.menu.value)
    sort = Column(Integer, nullable=False, default=0)
    description = Column(String(255), nullable=True, default="")
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    roles = relationship("Role", secondary=role_permissions, back_populates="permissions")
