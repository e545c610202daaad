# routers/mobile_auth.py
"""
Mobile authentication routes. Only penyewa accounts may sign in here.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import TOKEN_INVALID, get_current_user
from models import ProfilePenyewa, RoleName, User
from routers.auth import register_user, user_payload
from schemas.auth import LoginRequest, RefreshTokenRequest, RegisterRequest
from schemas.profile import ProfilePenyewaResponse
from services.auth_service import TokenError, authenticate, create_token_pair, decode_token
from services.role_service import get_user_roles, has_role, role_flags

router = APIRouter(prefix="/api/mobile/auth", tags=["mobile-auth"])

PENYEWA_ONLY = "Akses ditolak: Hanya akun Penyewa yang dapat login melalui aplikasi ini."


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: Session = Depends(get_session)):
     user = register_user(db, body, RoleName.PENYEWA.value)
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

     if not has_role(db, user.id, RoleName.PENYEWA.value):
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=PENYEWA_ONLY)

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


@router.post("/refresh-token")
def refresh_token(body: RefreshTokenRequest, db: Session = Depends(get_session)):
     if not body.refresh_token:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="refresh_token harus disertakan")

     try:
          payload = decode_token(body.refresh_token, expected_type="refresh")
     except TokenError:
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=TOKEN_INVALID)

     user = db.query(User).filter(User.id == payload["sub"]).first()
     if not user:
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=TOKEN_INVALID)

     return {"success": True, "data": create_token_pair(user)}


@router.get("/me")
def me(db: Session = Depends(get_session), user: User = Depends(get_current_user)):
     roles = get_user_roles(db, user.id)
     profile = db.query(ProfilePenyewa).filter(ProfilePenyewa.user_id == user.id).first()
     return {
          "success": True,
          "data": {
               "user": user_payload(user),
               "roles": roles,
               **role_flags(roles),
               "profile_penyewa": (
                    ProfilePenyewaResponse.model_validate(profile).model_dump(mode="json")
                    if profile else None
               ),
          },
     }
