# routers/auth.py
"""
Web authentication routes: register, login, current user, password reset.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user
from models import RoleName, User
from schemas.auth import ForgotPasswordRequest, LoginRequest, RegisterRequest, ResetPasswordRequest
from services.auth_service import (
     authenticate,
     OTP_TTL_MINUTES,
     consume_reset_otp,
     create_token_pair,
     hash_password,
     issue_reset_otp,
)
from services.role_service import assign_role, get_user_roles, role_flags
from utils.email import send_reset_otp_email
from utils.logger import logger, log_db_operation

router = APIRouter(prefix="/api/auth", tags=["auth"])


def user_payload(user: User) -> dict:
     return {
          "id": user.id,
          "email": user.email,
          "name": user.name,
          "phone": user.phone,
          "avatar_url": user.avatar_url,
     }


def register_user(db: Session, body: RegisterRequest, role_name: str) -> User:
     """Create a user with one initial role. Duplicate email is a 400."""
     if db.query(User.id).filter(User.email == body.email).first():
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email sudah terdaftar")

     user = User(
          email=body.email,
          password=hash_password(body.password),
          name=body.name,
          phone=body.phone,
     )
     db.add(user)
     db.flush()
     log_db_operation("INSERT", "users", True, 1)
     assign_role(db, user.id, role_name)
     return user


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: Session = Depends(get_session)):
     user = register_user(db, body, RoleName.USER.value)
     return {
          "success": True,
          "message": "Registrasi berhasil",
          "data": {"user": user_payload(user)},
     }


@router.post("/login")
def login(body: LoginRequest, db: Session = Depends(get_session)):
     user = authenticate(db, body.email, body.password)
     if not user:
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Email atau password salah")

     roles = get_user_roles(db, user.id)
     return {
          "success": True,
          "data": {
               "user": user_payload(user),
               **create_token_pair(user),
               "roles": roles,
               **role_flags(roles),
          },
     }


@router.get("/me")
def me(db: Session = Depends(get_session), user: User = Depends(get_current_user)):
     roles = get_user_roles(db, user.id)
     return {
          "success": True,
          "data": {"user": user_payload(user), "roles": roles, **role_flags(roles)},
     }


@router.post("/forgot-password")
def forgot_password(body: ForgotPasswordRequest, db: Session = Depends(get_session)):
     """Email a reset OTP. The response does not reveal whether the email exists."""
     user = db.query(User).filter(User.email == body.email.lower()).first()
     if user:
          otp = issue_reset_otp(user)
          db.flush()
          try:
               send_reset_otp_email(user.email, otp, OTP_TTL_MINUTES)
          except Exception as e:
               logger.error(f"Failed to send reset OTP to {user.email}: {e}")

     return {
          "success": True,
          "message": "Jika email terdaftar, kode OTP telah dikirim",
     }


@router.post("/reset-password")
def reset_password(body: ResetPasswordRequest, db: Session = Depends(get_session)):
     user = db.query(User).filter(User.email == body.email.lower()).first()
     if not user or not consume_reset_otp(user, body.otp):
          # Persist the failed-attempt count before the 400
          db.commit()
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="Kode OTP tidak valid atau sudah kadaluarsa",
          )

     user.password = hash_password(body.password)
     db.flush()
     log_db_operation("UPDATE", "users", True, 1)
     return {"success": True, "message": "Password berhasil diubah"}
