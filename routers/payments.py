# routers/payments.py
"""
Payment gateway routes.

POST /api/payment: Snap token for the web rent form.
POST /api/payment/notification: re-check a web payment with the status API.
POST /api/midtrans/webhook: signed gateway notification for mobile invoices.
"""
from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user
from models import User
from schemas.transaction import PaymentNotification, PaymentRequest
from services import midtrans
from services.transaction_service import TransactionError, TransactionService
from utils.logger import logger

router = APIRouter(tags=["payments"])


@router.post("/api/payment")
def create_payment(
     body: PaymentRequest,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     try:
          transaction, token = TransactionService.create_rent_payment(db, user, body)
     except TransactionError as e:
          raise HTTPException(status_code=e.status_code, detail=str(e))
     return {"success": True, "token": token, "transactionId": transaction.id}


@router.post("/api/payment/notification")
def payment_notification(body: PaymentNotification, db: Session = Depends(get_session)):
     try:
          transaction = TransactionService.apply_notification(db, body.order_id)
     except TransactionError as e:
          raise HTTPException(status_code=e.status_code, detail=str(e))
     return {
          "success": True,
          "data": {"id": transaction.id, "payment_status": transaction.payment_status},
     }


@router.post("/api/midtrans/webhook")
def midtrans_webhook(payload: dict = Body(...), db: Session = Depends(get_session)):
     if not midtrans.verify_signature(payload):
          logger.warning(f"Rejected webhook with bad signature for order {payload.get('order_id')}")
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid signature")

     try:
          transaction = TransactionService.apply_webhook(db, payload)
     except TransactionError as e:
          raise HTTPException(status_code=e.status_code, detail=str(e))
     return {
          "success": True,
          "data": {
               "invoice_number": transaction.invoice_number,
               "payment_status": transaction.payment_status,
          },
     }
