# schemas/auth.py
"""
Pydantic schemas for login/registration.

Credentials are optional at the schema level so that a missing field is
reported with the API's own 400 message rather than a validation error.
"""
from typing import Optional
from pydantic import ConfigDict

from .common import CamelModel


class LoginRequest(CamelModel):
     """Request body for POST /api/auth/login."""
     email: Optional[str] = None
     password: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "email": "admin@example.com",
                    "password": "admin123",
               }
          }
     )


class RegisterRequest(CamelModel):
     """Request body for POST /api/auth/register."""
     email: Optional[str] = None
     password: Optional[str] = None
     name: Optional[str] = None


class AuthUser(CamelModel):
     id: int
     email: str
     name: Optional[str] = None
     is_staff: bool = False
     role: Optional[str] = None


class TokenResponse(CamelModel):
     """Response for login and registration."""
     token: str
     user: AuthUser
