# services/auth_service.py
"""
Password hashing and bearer-token issuing/verification.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from config import Settings
from models import User

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)


def hash_password(password: str) -> str:
     return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
     """Check a password against a stored hash; malformed hashes never match."""
     if not hashed_password:
          return False
     try:
          return pwd_context.verify(plain_password, hashed_password)
     except (ValueError, TypeError):
          return False


def create_access_token(user: User, settings: Settings) -> str:
     """
     Sign a token for the user.

     Claims: sub (user id as string), email, isStaff, role (effective role,
     omitted when the user has none), iat and exp.
     """
     now = datetime.now(timezone.utc)
     claims = {
          "sub": str(user.id),
          "email": user.email,
          "isStaff": bool(user.is_staff),
          "iat": int(now.timestamp()),
          "exp": int((now + timedelta(hours=settings.token_ttl_hours)).timestamp()),
     }
     role = user.effective_role
     if role is not None:
          claims["role"] = role.value
     return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> Optional[dict]:
     """Return the verified claims, or None for a bad signature or an expired token."""
     try:
          return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
     except JWTError:
          return None


def user_payload(user: User) -> dict:
     """Public shape of a user returned next to a token."""
     role = user.effective_role
     return {
          "id": user.id,
          "email": user.email,
          "name": user.name,
          "isStaff": bool(user.is_staff),
          "role": role.value if role else None,
     }
