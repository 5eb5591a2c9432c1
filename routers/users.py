# routers/users.py
"""
Backoffice user management (admin only). Password hashes never leave the
server, not even in audit snapshots.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import commit_or_conflict, get_session
from dependencies import RowId, require_role
from errors import APIError, store_errors
from models import User, UserRole
from schemas.common import OkResponse
from schemas.user import UserCreate, UserResponse, UserUpdate
from services.audit_service import (
     ACTION_CREATE,
     ACTION_DELETE,
     ACTION_UPDATE,
     actor_id_from_claims,
     record_audit,
     snapshot,
)
from services.auth_service import hash_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/users", tags=["admin: users"])

admin_only = require_role(UserRole.ADMIN)


def _parse_role(role: Optional[str]) -> Optional[str]:
     if role is None or role == "":
          return None
     parsed = UserRole.parse(role)
     if parsed is None:
          raise APIError(400, "Invalid role", f"Role must be one of: {', '.join(r.value for r in UserRole)}")
     return parsed.value


def _get_user(db: Session, user_id: int) -> User:
     user = db.query(User).filter(User.id == user_id).first()
     if not user:
          raise APIError(404, "User not found")
     return user


@router.get("", response_model=List[UserResponse], summary="List users")
def list_users(
     db: Session = Depends(get_session),
     token: dict = Depends(admin_only)
):
     with store_errors("Failed to get users"):
          return db.query(User).order_by(User.id.asc()).all()


@router.post("", response_model=UserResponse, summary="Create a user")
def create_user(
     body: UserCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(admin_only)
):
     """
     Create a backoffice account. Role defaults to admin and staff to true.
     """
     if not body.email or not body.password:
          raise APIError(400, "Email and password required")
     role = _parse_role(body.role)

     if db.query(User.id).filter(User.email == body.email).first():
          raise APIError(400, "Email already exists")

     user = User(
          email=body.email,
          password=hash_password(body.password),
          name=body.name,
          role=role,
          is_staff=body.is_staff,
     )
     db.add(user)
     commit_or_conflict(db, "Email already exists")
     db.refresh(user)

     record_audit(db, actor_id_from_claims(token), ACTION_CREATE, "User", user.id, after=snapshot(user))
     return user


@router.put("/{user_id}", response_model=UserResponse, summary="Update a user")
def update_user(
     user_id: RowId,
     body: UserUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(admin_only)
):
     """
     Partial update; a new password is re-hashed. Role changes reach the
     user's tokens at their next login.
     """
     user = _get_user(db, user_id)
     before = snapshot(user)

     if body.email and body.email != user.email:
          if db.query(User.id).filter(User.email == body.email).first():
               raise APIError(400, "Email already exists")
          user.email = body.email
     if "name" in body.model_fields_set:
          user.name = body.name
     if body.role:
          user.role = _parse_role(body.role)
     if body.is_staff is not None:
          user.is_staff = body.is_staff
     if body.password:
          user.password = hash_password(body.password)

     commit_or_conflict(db, "Email already exists")
     db.refresh(user)

     record_audit(db, actor_id_from_claims(token), ACTION_UPDATE, "User", user_id, before=before, after=snapshot(user))
     return user


@router.delete("/{user_id}", response_model=OkResponse, summary="Delete a user")
def delete_user(
     user_id: RowId,
     db: Session = Depends(get_session),
     token: dict = Depends(admin_only)
):
     if user_id == actor_id_from_claims(token):
          raise APIError(400, "Cannot delete your own account")

     user = _get_user(db, user_id)
     before = snapshot(user)
     db.delete(user)
     db.commit()
     logger.info("Deleted user %s", user_id)

     record_audit(db, actor_id_from_claims(token), ACTION_DELETE, "User", user_id, before=before)
     return OkResponse()
