"""Pydantic schemas for API request/response serialization."""

from pydantic import BaseModel, Field, field_validator
from typing import Annotated, Optional, List
from datetime import datetime

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

# SQLite stores integers as signed 64-bit
MAX_SQL_INT = 2**63 - 1
SqlInt = Annotated[int, Field(ge=-MAX_SQL_INT - 1, le=MAX_SQL_INT)]

# bcrypt only looks at the first 72 bytes and newer releases refuse more
MAX_PASSWORD_BYTES = 72


def _check_password_bytes(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
    return value


# ---- Auth ----
class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


# ---- Role ----
class RoleBrief(BaseModel):
    id: int
    name: str
    code: str

    class Config:
        from_attributes = True

class RoleCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    code: str = Field(..., min_length=1, max_length=50)
    description: str = Field("", max_length=255)

class RoleUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=50)
    code: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = Field(None, max_length=255)

class AssignPermissionsRequest(BaseModel):
    permission_ids: List[SqlInt]


# ---- Permission ----
class PermissionOut(BaseModel):
    id: int
    name: str
    code: str
    parent_code: str = ""
    path: str = ""
    type: int
    sort: int
    description: Optional[str] = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class PermissionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    code: str = Field(..., min_length=1, max_length=50)
    parent_code: str = Field("", max_length=50)
    path: str = Field("", max_length=100)
    type: int = Field(1, ge=1, le=3)
    sort: SqlInt = 0
    description: str = Field("", max_length=255)

class PermissionUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=50)
    code: Optional[str] = Field(None, max_length=50)
    parent_code: Optional[str] = Field(None, max_length=50)
    path: Optional[str] = Field(None, max_length=100)
    type: Optional[int] = Field(None, ge=1, le=3)
    sort: Optional[SqlInt] = None
    description: Optional[str] = Field(None, max_length=255)

class PermissionTreeNode(BaseModel):
    """One node of the permission tree; children are linked by parent_code."""
    id: int
    name: str
    code: str
    parent_code: str = ""
    path: str = ""
    type: int
    sort: int
    description: Optional[str] = ""
    children: List["PermissionTreeNode"] = Field(default_factory=list)
    has_children: bool = False
    checked: bool = False

    class Config:
        from_attributes = True


class RoleOut(BaseModel):
    id: int
    name: str
    code: str
    description: Optional[str] = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class RoleDetail(RoleOut):
    permissions: List[PermissionOut] = []

class RolePermissionData(BaseModel):
    role_id: int
    permission_ids: List[int]
    permission_trees: List[PermissionTreeNode]


# ---- User ----
class UserOut(BaseModel):
    id: int
    username: str
    realname: Optional[str] = ""
    email: Optional[str] = ""
    phone: Optional[str] = None
    avatar: Optional[str] = None
    status: int
    role_id: Optional[int] = None
    role: Optional[RoleBrief] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=72)
    realname: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., max_length=100, pattern=EMAIL_PATTERN)
    phone: Optional[str] = Field(None, max_length=20)
    avatar: Optional[str] = Field(None, max_length=500)
    role_id: Optional[SqlInt] = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v):
        return _check_password_bytes(v)

class UserUpdate(BaseModel):
    username: Optional[str] = Field(None, max_length=50)
    password: Optional[str] = Field(None, max_length=72)
    realname: Optional[str] = Field(None, max_length=50)
    email: Optional[str] = Field(None, max_length=100, pattern=EMAIL_PATTERN)
    phone: Optional[str] = Field(None, max_length=20)
    avatar: Optional[str] = Field(None, max_length=500)
    status: Optional[int] = Field(None, ge=0, le=1)
    role_id: Optional[SqlInt] = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v):
        return _check_password_bytes(v)

class BatchDeleteRequest(BaseModel):
    ids: List[SqlInt] = Field(..., min_length=1)


# ---- Dashboard ----
class DashboardStats(BaseModel):
    total_users: int
    active_users: int
    disabled_users: int
    total_roles: int
    total_permissions: int
