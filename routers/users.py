# routers/users.py
"""
Role assignment and role checks for the web dashboard.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import AuthContext, get_auth_context, require_role
from models import RoleName, User
from schemas.auth import AssignAdminRequest
from services.role_service import assign_role, role_flags

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/assign-role")
def assign_user_role(
     db: Session = Depends(get_session),
     ctx: AuthContext = Depends(get_auth_context),
):
     """Give the caller the default web role."""
     added = assign_role(db, ctx.id, RoleName.USER.value)
     return {
          "success": True,
          "message": "Role user berhasil ditambahkan" if added else "Role user sudah dimiliki",
     }


@router.post("/assign-admin-role")
def assign_admin_role(
     body: AssignAdminRequest,
     db: Session = Depends(get_session),
     ctx: AuthContext = Depends(require_role(RoleName.ADMIN.value)),
):
     if not db.query(User.id).filter(User.id == body.user_id).first():
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User tidak ditemukan")

     added = assign_role(db, body.user_id, RoleName.ADMIN.value)
     return {
          "success": True,
          "message": "Role admin berhasil ditambahkan" if added else "User sudah memiliki role admin",
     }


@router.get("/check-role")
def check_role(ctx: AuthContext = Depends(get_auth_context)):
     flags = role_flags(ctx.roles)
     return {
          "success": True,
          "isAdmin": flags["isAdmin"],
          "isPemilik": flags["isPemilik"],
          "isUser": flags["isUser"],
          "authenticated": True,
     }


@router.post("/assign-owner-role")
def assign_owner_role(
     db: Session = Depends(get_session),
     ctx: AuthContext = Depends(get_auth_context),
):
     """Owner registration: the caller becomes a pemilik."""
     added = assign_role(db, ctx.id, RoleName.PEMILIK.value)
     return {
          "success": True,
          "message": "Role pemilik berhasil ditambahkan" if added else "Role pemilik sudah dimiliki",
     }
