# models/user.py
import enum
from typing import Optional

from sqlalchemy import Column, Integer, String, Boolean, DateTime, func
from .base import Base


class UserRole(str, enum.Enum):
     """Closed set of backoffice roles."""
     ADMIN = "admin"
     SALES = "sales"
     VIEWER = "viewer"

     @classmethod
     def parse(cls, value) -> Optional["UserRole"]:
          """Return the matching role, or None for anything unknown or empty."""
          if value is None:
               return None
          try:
               return cls(str(value).strip().lower())
          except ValueError:
               return None

     @classmethod
     def derive(cls, role, is_staff) -> Optional["UserRole"]:
          """
          Resolve the effective role: an explicit known role wins, otherwise
          staff accounts are admins, otherwise there is no role.
          """
          explicit = cls.parse(role)
          if explicit is not None:
               return explicit
          if is_staff:
               return cls.ADMIN
          return None


class User(Base):
     """
     User model - central authentication table.
     """
     __tablename__ = "users"

     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(String(255), unique=True, nullable=False, index=True)
     password = Column(String(255), nullable=False)
     name = Column(String(200), nullable=True)
     role = Column(String(50), nullable=True)  # admin, sales, viewer
     is_staff = Column(Boolean, default=False, nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     @property
     def effective_role(self) -> Optional[UserRole]:
          return UserRole.derive(self.role, self.is_staff)

     def to_dict(self, exclude=()):
          return super().to_dict(exclude=set(exclude) | {"password"})

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
