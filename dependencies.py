# dependencies.py
"""
Request-scoped dependencies: settings, upload storage, bearer-token
verification and the role gate.
"""
from typing import Annotated, Union

from fastapi import Depends, Path, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config import Settings
from errors import APIError
from models import UserRole
from services.auth_service import decode_access_token
from services.storage_service import UploadStorage

security = HTTPBearer(auto_error=False)

# Largest value a signed 64-bit INTEGER column holds
MAX_ROW_ID = 2 ** 63 - 1

RowId = Annotated[int, Path(le=MAX_ROW_ID, description="Row id")]


def get_settings(request: Request) -> Settings:
     return request.app.state.settings


def get_storage(request: Request) -> UploadStorage:
     return request.app.state.storage


def verify_token(
     credentials: HTTPAuthorizationCredentials = Depends(security),
     settings: Settings = Depends(get_settings),
) -> dict:
     """
     Validate the bearer token and return its claims.
     401 "No token" when absent, 401 "Invalid token" when forged or expired.
     """
     if credentials is None or not credentials.credentials:
          raise APIError(401, "No token")
     claims = decode_access_token(credentials.credentials, settings)
     if claims is None:
          raise APIError(401, "Invalid token")
     return claims


def resolve_role(claims: dict):
     """Role carried by the token, falling back to admin for staff tokens."""
     return UserRole.derive(claims.get("role"), claims.get("isStaff"))


def require_role(*roles: Union[UserRole, str]):
     """
     Build a dependency admitting callers whose resolved role is listed.

     With no roles listed any resolved role passes; a caller that resolves
     to no role is always rejected with 403.
     """
     allowed = {UserRole(r) for r in roles}

     def role_gate(claims: dict = Depends(verify_token)) -> dict:
          role = resolve_role(claims)
          if role is None or (allowed and role not in allowed):
               raise APIError(403, "Forbidden")
          return claims

     return role_gate

