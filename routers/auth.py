# routers/auth.py
"""
Authentication routes: login, self-registration and token introspection.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from config import Settings
from database import get_session
from dependencies import get_settings, verify_token
from errors import APIError, store_errors
from models import User
from schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from services.auth_service import create_access_token, hash_password, user_payload, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse, summary="Exchange credentials for a token")
def login(
     body: LoginRequest,
     db: Session = Depends(get_session),
     settings: Settings = Depends(get_settings)
):
     """
     Verify email and password and issue a 12-hour bearer token.

     - 400 when either field is missing
     - 401 "Invalid credentials" for an unknown email or a wrong password
     """
     if not body.email or not body.password:
          raise APIError(400, "Email and password required")

     with store_errors("Login failed", with_details=False):
          user = db.query(User).filter(User.email == body.email).first()

     if not user or not verify_password(body.password, user.password):
          logger.info("Rejected login for %s", body.email)
          raise APIError(401, "Invalid credentials")

     return {"token": create_access_token(user, settings), "user": user_payload(user)}


@router.post("/register", response_model=TokenResponse, summary="Create an account")
def register(
     body: RegisterRequest,
     db: Session = Depends(get_session),
     settings: Settings = Depends(get_settings)
):
     """
     Create a non-staff account without a role and log it in.
     """
     if not body.email or not body.password:
          raise APIError(400, "Email and password required")

     with store_errors("Registration failed", with_details=False):
          exists = db.query(User).filter(User.email == body.email).first()
          if exists:
               raise APIError(400, "Email already exists")

          user = User(
               email=body.email,
               password=hash_password(body.password),
               name=body.name or None,
               is_staff=False,
          )
          db.add(user)
          db.commit()
          db.refresh(user)

     logger.info("Registered user %s", user.id)
     return {"token": create_access_token(user, settings), "user": user_payload(user)}


@router.get("/me", summary="Claims of the current token")
def me(token: dict = Depends(verify_token)):
     return token
