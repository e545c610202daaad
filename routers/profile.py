# routers/profile.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user
from models import ProfilePenyewa, User
from schemas.profile import ProfilePenyewaResponse, ProfilePenyewaUpsert
from utils.logger import log_db_operation

router = APIRouter(prefix="/api/mobile/profile", tags=["mobile-profile"])


@router.get("")
def get_profile(db: Session = Depends(get_session), user: User = Depends(get_current_user)):
     profile = db.query(ProfilePenyewa).filter(ProfilePenyewa.user_id == user.id).first()
     if not profile:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profil belum dibuat")
     return {
          "success": True,
          "data": ProfilePenyewaResponse.model_validate(profile).model_dump(mode="json"),
     }


@router.post("")
def upsert_profile(
     body: ProfilePenyewaUpsert,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     """Create the caller's tenant profile or replace its fields."""
     profile = db.query(ProfilePenyewa).filter(ProfilePenyewa.user_id == user.id).first()
     values = body.model_dump()
     values["gender"] = body.gender.value

     if profile:
          for field, value in values.items():
               setattr(profile, field, value)
          operation = "UPDATE"
     else:
          profile = ProfilePenyewa(user_id=user.id, **values)
          db.add(profile)
          operation = "INSERT"

     db.flush()
     db.refresh(profile)
     log_db_operation(operation, "profile_penyewa", True, 1)
     return {
          "success": True,
          "message": "Profil berhasil disimpan",
          "data": ProfilePenyewaResponse.model_validate(profile).model_dump(mode="json"),
     }
