# schemas/user.py
from datetime import datetime
from typing import Optional
from pydantic import Field

from .common import CamelModel


class UserCreate(CamelModel):
     """Schema for POST /api/admin/users. Backoffice accounts default to staff admins."""
     email: Optional[str] = None
     password: Optional[str] = None
     name: Optional[str] = None
     role: Optional[str] = Field("admin", description="admin, sales or viewer")
     is_staff: bool = True


class UserUpdate(CamelModel):
     email: Optional[str] = None
     password: Optional[str] = None
     name: Optional[str] = None
     role: Optional[str] = None
     is_staff: Optional[bool] = None


class UserResponse(CamelModel):
     """A user without the password hash."""
     id: int
     email: str
     name: Optional[str] = None
     role: Optional[str] = None
     is_staff: bool
     created_at: Optional[datetime] = None
