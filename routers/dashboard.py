# routers/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_session
from dependencies import AuthContext, get_auth_context
from models import RoleName
from services import dashboard_service
from services.role_service import role_flags

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("")
def dashboard(
     db: Session = Depends(get_session),
     ctx: AuthContext = Depends(get_auth_context),
):
     """Summary for the caller's highest role: admin, then pemilik, then tenant."""
     if ctx.is_admin:
          role, summary = RoleName.ADMIN.value, dashboard_service.admin_summary(db)
     elif RoleName.PEMILIK.value in ctx.roles:
          role, summary = RoleName.PEMILIK.value, dashboard_service.pemilik_summary(db, ctx.id)
     else:
          role, summary = "penyewa", dashboard_service.penyewa_summary(db, ctx.id)

     return {
          "success": True,
          "data": {"role": role, **role_flags(ctx.roles), "summary": summary},
     }
