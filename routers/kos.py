# routers/kos.py
"""
Kos listing API routes for the web dashboard.

Role-based access:
- Any signed-in user: browse, search, like
- Pemilik: create and manage own listings
- Admin: manage every listing
"""
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from database import get_session
from dependencies import AuthContext, get_auth_context, require_role
from models import GambarKos, Kos, KosStatus, RoleName
from schemas.kos import KosCreate, KosUpdate
from services.kos_service import SEARCH_FETCH_LIMIT, KosService, filter_kos, to_kos_data
from services.like_service import DuplicateLikeError, liked_kos, toggle_like
from utils.logger import logger

router = APIRouter(prefix="/api/kos", tags=["kos"])

owner_or_admin = require_role(RoleName.PEMILIK.value, RoleName.ADMIN.value)


class LikeRequest(BaseModel):
     kos_id: Optional[str] = Field(None, alias="kosId")

     model_config = ConfigDict(populate_by_name=True)


def _validate_uuid(kos_id: str) -> None:
     try:
          uuid.UUID(kos_id)
     except ValueError:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid UUID format")


def _get_owned_or_404(db: Session, kos_id: str, ctx: AuthContext) -> Kos:
     _validate_uuid(kos_id)
     kos = KosService.get_owned_kos(db, kos_id, ctx.id, ctx.roles)
     if not kos:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Kos tidak ditemukan")
     return kos


@router.get("")
def list_kos(
     db: Session = Depends(get_session),
     ctx: AuthContext = Depends(get_auth_context),
):
     kos_list = db.query(Kos).order_by(Kos.created_at.desc()).all()
     return {"success": True, "data": [to_kos_data(kos) for kos in kos_list]}


@router.get("/search")
def search_kos(
     search: Optional[str] = Query(None),
     city: Optional[str] = Query(None),
     room_type: Optional[str] = Query(None, alias="roomType"),
     gender_type: Optional[str] = Query(None, alias="genderType"),
     min_price: Optional[str] = Query(None, alias="minPrice"),
     max_price: Optional[str] = Query(None, alias="maxPrice"),
     db: Session = Depends(get_session),
     ctx: AuthContext = Depends(get_auth_context),
):
     """
     Listing page search. Only the newest active listings are fetched;
     filtering runs over that page in memory.
     """
     fetched = (
          db.query(Kos)
          .filter(Kos.property_status == KosStatus.ACTIVE)
          .order_by(Kos.created_at.desc())
          .limit(SEARCH_FETCH_LIMIT)
          .all()
     )
     results = filter_kos(fetched, search, city, room_type, gender_type, min_price, max_price)
     liked = KosService.liked_ids(db, ctx.id)

     return {
          "success": True,
          "data": [to_kos_data(kos, include_images=True, is_liked=kos.id in liked) for kos in results],
          "total": len(fetched),
          "shown": len(results),
          "cities": sorted({kos.city for kos in fetched if kos.city}),
          "roomTypes": sorted({kos.room_type for kos in fetched if kos.room_type}),
     }


@router.get("/mine")
def my_kos(
     db: Session = Depends(get_session),
     ctx: AuthContext = Depends(require_role(RoleName.PEMILIK.value)),
):
     kos_list = (
          db.query(Kos)
          .filter(Kos.user_id == ctx.id)
          .order_by(Kos.created_at.desc())
          .all()
     )
     return {"success": True, "data": [to_kos_data(kos, include_images=True) for kos in kos_list]}


@router.get("/favorites")
def favorites(
     db: Session = Depends(get_session),
     ctx: AuthContext = Depends(get_auth_context),
):
     return {
          "success": True,
          "data": [to_kos_data(kos, include_images=True, is_liked=True) for kos in liked_kos(db, ctx.id)],
     }


@router.post("/like")
def like_kos(
     body: LikeRequest,
     db: Session = Depends(get_session),
     ctx: AuthContext = Depends(get_auth_context),
):
     if not body.kos_id:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Kos ID diperlukan")
     if not KosService.get_kos(db, body.kos_id):
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Kos tidak ditemukan")

     try:
          liked = toggle_like(db, ctx.id, body.kos_id)
     except DuplicateLikeError:
          raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Kos sudah disukai")
     return {"success": True, "liked": liked}


@router.get("/{kos_id}")
def get_kos(
     kos_id: str,
     db: Session = Depends(get_session),
     ctx: AuthContext = Depends(get_auth_context),
):
     _validate_uuid(kos_id)
     kos = KosService.get_kos(db, kos_id)
     if not kos:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Kos tidak ditemukan")

     liked = kos.id in KosService.liked_ids(db, ctx.id)
     return {"success": True, "data": to_kos_data(kos, include_images=True, is_liked=liked)}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_kos(
     body: KosCreate,
     db: Session = Depends(get_session),
     ctx: AuthContext = Depends(owner_or_admin),
):
     kos = KosService.create_kos(db, ctx.id, body)
     db.refresh(kos)
     return {"success": True, "message": "Kos berhasil ditambahkan", "data": to_kos_data(kos)}


@router.put("/{kos_id}")
def update_kos(
     kos_id: str,
     body: KosUpdate,
     db: Session = Depends(get_session),
     ctx: AuthContext = Depends(owner_or_admin),
):
     kos = _get_owned_or_404(db, kos_id, ctx)
     try:
          KosService.update_kos(db, kos, body)
     except ValueError as e:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
     db.refresh(kos)
     return {"success": True, "message": "Kos berhasil diperbarui", "data": to_kos_data(kos)}


@router.delete("/{kos_id}")
def delete_kos(
     kos_id: str,
     db: Session = Depends(get_session),
     ctx: AuthContext = Depends(owner_or_admin),
):
     kos = _get_owned_or_404(db, kos_id, ctx)
     if kos.sewa:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Kos masih memiliki data sewa")
     KosService.delete_kos(db, kos)
     return {"success": True, "message": "Kos berhasil dihapus"}


@router.post("/{kos_id}/images", status_code=status.HTTP_201_CREATED)
def upload_image(
     kos_id: str,
     file: UploadFile = File(...),
     tipe_gambar_id: Optional[int] = Form(None),
     db: Session = Depends(get_session),
     ctx: AuthContext = Depends(owner_or_admin),
):
     kos = _get_owned_or_404(db, kos_id, ctx)
     if not (file.content_type or "").startswith("image/"):
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File harus berupa gambar")

     try:
          image = KosService.add_image(db, kos, file, tipe_gambar_id)
     except Exception as e:
          logger.error(f"Image upload for kos {kos.id} failed: {e}")
          raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Gagal mengunggah gambar")

     return {
          "success": True,
          "data": {
               "id": image.id,
               "kosId": kos.id,
               "namaFile": image.nama_file,
               "urlGambar": image.url_gambar,
               "tipeGambarId": image.tipe_gambar_id,
          },
     }


@router.delete("/{kos_id}/images/{image_id}")
def delete_image(
     kos_id: str,
     image_id: str,
     db: Session = Depends(get_session),
     ctx: AuthContext = Depends(owner_or_admin),
):
     kos = _get_owned_or_404(db, kos_id, ctx)
     image = (
          db.query(GambarKos)
          .filter(GambarKos.id == image_id, GambarKos.kos_id == kos.id)
          .first()
     )
     if not image:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Gambar tidak ditemukan")

     KosService.delete_image(db, image)
     return {"success": True, "message": "Gambar berhasil dihapus"}
