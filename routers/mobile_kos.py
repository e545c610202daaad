# routers/mobile_kos.py
"""
Mobile kos browsing and favorites. Responses use snake_case keys.
"""
import math
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from database import get_session
from dependencies import AuthContext, get_auth_context
from models import Kos, KosStatus
from services.kos_service import KosService, parse_price, to_kos_data
from services.like_service import DuplicateLikeError, liked_kos, toggle_like
from utils.logger import log_db_operation

router = APIRouter(prefix="/api/mobile/kos", tags=["mobile-kos"])


def _mobile(kos: Kos, is_liked: Optional[bool] = None) -> dict:
     return to_kos_data(kos, include_images=True, is_liked=is_liked, camel_case=False)


@router.get("")
def list_kos(
     search: Optional[str] = None,
     min_price: Optional[str] = None,
     max_price: Optional[str] = None,
     page: int = Query(1, ge=1),
     limit: int = Query(10, ge=1, le=100),
     offset: Optional[int] = Query(None, ge=0),
     db: Session = Depends(get_session),
     ctx: AuthContext = Depends(get_auth_context),
):
     """
     Active listings, newest first, filtered in the database.

     An explicit offset wins over page.
     """
     if offset is None:
          offset = (page - 1) * limit

     query = db.query(Kos).filter(Kos.property_status == KosStatus.ACTIVE)
     if search:
          pattern = f"%{search}%"
          query = query.filter(or_(Kos.name.ilike(pattern), Kos.address.ilike(pattern)))
     lower = parse_price(min_price)
     if lower is not None:
          query = query.filter(Kos.monthly_price >= lower)
     upper = parse_price(max_price)
     if upper is not None:
          query = query.filter(Kos.monthly_price <= upper)

     total_records = query.count()
     rows = (
          query.options(selectinload(Kos.images))
          .order_by(Kos.created_at.desc())
          .offset(offset)
          .limit(limit)
          .all()
     )

     total_pages = math.ceil(total_records / limit)
     current_page = offset // limit + 1
     return {
          "success": True,
          "data": [_mobile(kos) for kos in rows],
          "pagination": {
               "total_records": total_records,
               "total_pages": total_pages,
               "current_page": current_page,
               "next_page": current_page + 1 if current_page < total_pages else None,
               "prev_page": current_page - 1 if current_page > 1 else None,
               "limit": limit,
          },
     }


@router.post("/like")
def like_kos(
     kos_id: Optional[str] = None,
     db: Session = Depends(get_session),
     ctx: AuthContext = Depends(get_auth_context),
):
     if not kos_id:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="kos_id harus disertakan")
     if not KosService.get_kos(db, kos_id):
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Kos tidak ditemukan")

     try:
          liked = toggle_like(db, ctx.id, kos_id)
     except DuplicateLikeError:
          raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Kos sudah disukai")
     return {"success": True, "liked": liked}


@router.get("/like")
def like_status(
     kos_id: Optional[str] = None,
     db: Session = Depends(get_session),
     ctx: AuthContext = Depends(get_auth_context),
):
     """Like status for one kos, or the caller's liked list without kos_id."""
     if kos_id:
          return {"success": True, "liked": kos_id in KosService.liked_ids(db, ctx.id)}
     return {"success": True, "data": [_mobile(kos, is_liked=True) for kos in liked_kos(db, ctx.id)]}


@router.get("/{kos_id}")
def get_kos(
     kos_id: str,
     db: Session = Depends(get_session),
     ctx: AuthContext = Depends(get_auth_context),
):
     kos = KosService.get_kos(db, kos_id)
     if not kos:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Kos tidak ditemukan")

     kos.view_count = (kos.view_count or 0) + 1
     db.flush()
     log_db_operation("UPDATE", "kos", True, 1)

     return {"success": True, "data": _mobile(kos, is_liked=kos.id in KosService.liked_ids(db, ctx.id))}
