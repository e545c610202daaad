# routers/sewa.py
"""
Mobile rental routes: create a lease with its monthly bills, list leases.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user
from models import User
from schemas.sewa import SewaCreate, SewaResponse, SewaWithTagihan, TagihanResponse
from services.sewa_service import BillingError, SewaService

router = APIRouter(prefix="/api/mobile/sewa", tags=["mobile-sewa"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_sewa(
     body: SewaCreate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     """
     Rent a kos.

     - **kos_id**: listing to rent
     - **start_date**: first day of the lease
     - **end_date**: optional last day; without it only the first month is billed
     - **monthly_price**: used only when the listing has no price
     """
     try:
          sewa, current_bill = SewaService.create_sewa(
               db,
               kos_id=body.kos_id,
               penyewa_id=user.id,
               start_date=body.start_date,
               end_date=body.end_date,
               monthly_price=body.monthly_price,
          )
     except BillingError as e:
          raise HTTPException(status_code=e.status_code, detail=str(e))

     return {
          "success": True,
          "message": "Sewa berhasil dibuat",
          "data": {
               "sewa": SewaResponse.model_validate(sewa).model_dump(mode="json"),
               "tagihan": (
                    TagihanResponse.model_validate(current_bill).model_dump(mode="json")
                    if current_bill else None
               ),
          },
     }


@router.get("")
def list_sewa(db: Session = Depends(get_session), user: User = Depends(get_current_user)):
     leases = SewaService.list_for_penyewa(db, user.id)
     return {
          "success": True,
          "data": [SewaWithTagihan.model_validate(sewa).model_dump(mode="json") for sewa in leases],
     }
