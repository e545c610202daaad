# routers/transactions.py
"""
Transaction routes.

Mobile: pay a tagihan through Snap, confirm the client-side result, list.
Web dashboard: list transactions and approve or reject them.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import AuthContext, get_current_user, require_role
from models import RoleName, User
from schemas.transaction import (
     TransactionApproval,
     TransactionCreate,
     TransactionResponse,
     TransactionStatusUpdate,
)
from services.transaction_service import TransactionError, TransactionService

mobile_router = APIRouter(prefix="/api/mobile/transactions", tags=["mobile-transactions"])
router = APIRouter(prefix="/api/transactions", tags=["transactions"])


def _dump(transaction) -> dict:
     return TransactionResponse.model_validate(transaction).model_dump(mode="json")


@mobile_router.post("", status_code=status.HTTP_201_CREATED)
def create_transaction(
     body: TransactionCreate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     try:
          transaction, snap = TransactionService.create_for_tagihan(
               db,
               user,
               body.tagihan_id,
               payment_method=body.payment_method,
               mitrans_id=body.mitrans_id,
               mitrans_status=body.mitrans_status,
               notes=body.notes,
          )
     except TransactionError as e:
          raise HTTPException(status_code=e.status_code, detail=str(e))

     return {
          "success": True,
          "message": "Transaksi berhasil dibuat",
          "data": {"transaction": _dump(transaction), "midtrans": snap},
     }


@mobile_router.patch("")
def update_transaction_status(
     body: TransactionStatusUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     """Record a successful Snap payment reported by the app."""
     try:
          transaction = TransactionService.confirm_mobile_payment(
               db, user.id, body.order_id, body.status, body.transaction_status
          )
     except TransactionError as e:
          raise HTTPException(status_code=e.status_code, detail=str(e))

     if transaction is None:
          return {"success": True, "message": "Status tidak diubah", "data": None}
     return {
          "success": True,
          "message": "Status transaksi diperbarui",
          "data": _dump(transaction),
     }


@mobile_router.get("")
def list_my_transactions(db: Session = Depends(get_session), user: User = Depends(get_current_user)):
     return {
          "success": True,
          "data": [_dump(t) for t in TransactionService.list_for_penyewa(db, user.id)],
     }


owner_or_admin = require_role(RoleName.PEMILIK.value, RoleName.ADMIN.value)


@router.get("")
def list_transactions(
     db: Session = Depends(get_session),
     ctx: AuthContext = Depends(owner_or_admin),
):
     transactions = TransactionService.list_for_dashboard(db, ctx.id, ctx.is_admin)
     return {"success": True, "data": [_dump(t) for t in transactions]}


@router.patch("/{transaction_id}/status")
def set_transaction_status(
     transaction_id: str,
     body: TransactionApproval,
     db: Session = Depends(get_session),
     ctx: AuthContext = Depends(owner_or_admin),
):
     try:
          transaction = TransactionService.set_approval(
               db, transaction_id, ctx.id, ctx.is_admin, body.status.value
          )
     except TransactionError as e:
          raise HTTPException(status_code=e.status_code, detail=str(e))
     return {"success": True, "data": _dump(transaction)}
