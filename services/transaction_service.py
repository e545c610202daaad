# services/transaction_service.py
"""
Transaction Service - gateway payments for tagihan (mobile) and the
web rent form, plus status updates from the gateway.
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from models import Kos, Tagihan, Transaction
from models.transaction import PaymentStatus
from services import midtrans
from utils.logger import logger, log_db_operation


# Stored when the mobile client does not name a payment method
DEFAULT_PAYMENT_METHOD = "midtrans"


class TransactionError(Exception):
     """Raised when a transaction cannot be created or updated."""

     def __init__(self, message: str, status_code: int = 400):
          super().__init__(message)
          self.status_code = status_code


class TransactionService:
     """Service class for payment transactions."""

     @staticmethod
     def create_for_tagihan(
          db: Session,
          user,
          tagihan_id: str,
          payment_method: Optional[str] = None,
          mitrans_id: Optional[str] = None,
          mitrans_status: Optional[str] = None,
          notes: Optional[str] = None,
     ) -> tuple[Transaction, Optional[dict]]:
          """
          Create a pending transaction for a tagihan and open a Snap payment.

          The transaction row is committed before the gateway call. A gateway
          failure is logged and reported as a None Snap result.

          Returns:
               (transaction, {"token", "redirect_url"} or None)

          Raises:
               TransactionError: 404 if the tagihan is missing, 500 if its
                    kos has no owner.
          """
          tagihan = db.query(Tagihan).filter(Tagihan.id == tagihan_id).first()
          if not tagihan:
               raise TransactionError("Tagihan tidak ditemukan", status_code=404)

          kos = tagihan.sewa.kos if tagihan.sewa else None
          if not kos or not kos.user_id:
               raise TransactionError("Pemilik kos tidak ditemukan", status_code=500)

          transaction = Transaction(
               tagihan_id=tagihan.id,
               kos_id=kos.id,
               user_penyewa_id=user.id,
               user_penyedia_id=kos.user_id,
               amount=tagihan.amount,
               payment_status=PaymentStatus.PENDING.value,
               payment_method=payment_method or DEFAULT_PAYMENT_METHOD,
               invoice_number=midtrans.generate_invoice_number(),
               mitrans_id=mitrans_id,
               mitrans_status=mitrans_status or PaymentStatus.PENDING.value,
               notes=notes,
          )
          db.add(transaction)
          db.commit()
          log_db_operation("INSERT", "transactions", True, 1)

          payload = {
               "transaction_details": {
                    "order_id": transaction.invoice_number,
                    "gross_amount": midtrans.gross_amount(tagihan.amount),
               },
               "customer_details": {
                    "first_name": user.name or user.email,
                    "email": user.email,
                    "phone": user.phone,
               },
               "item_details": [{
                    "id": tagihan.id,
                    "price": midtrans.gross_amount(tagihan.amount),
                    "quantity": 1,
                    "name": f"Tagihan {kos.name} {tagihan.billing_month:02d}/{tagihan.billing_year}"[:50],
               }],
               "callbacks": midtrans.MOBILE_CALLBACKS,
          }

          try:
               snap = midtrans.create_snap_transaction(payload)
          except midtrans.PaymentGatewayError as e:
               logger.error(f"Snap transaction for {transaction.invoice_number} failed: {e}")
               return transaction, None

          transaction.snap_token = snap["token"]
          db.commit()
          return transaction, snap

     @staticmethod
     def confirm_mobile_payment(
          db: Session,
          user_id: str,
          order_id: str,
          status: str,
          transaction_status: Optional[str] = None,
     ) -> Optional[Transaction]:
          """
          Apply a client-reported Snap result. Only "success" changes anything.

          Raises:
               TransactionError: 404 if the caller has no transaction with that order_id.
          """
          if status != "success":
               return None

          transaction = (
               db.query(Transaction)
               .filter(
                    Transaction.invoice_number == order_id,
                    Transaction.user_penyewa_id == user_id,
               )
               .first()
          )
          if not transaction:
               raise TransactionError("Transaksi tidak ditemukan", status_code=404)

          transaction.payment_status = PaymentStatus.SUCCESS.value
          transaction.mitrans_id = order_id
          transaction.mitrans_status = transaction_status
          if transaction.tagihan:
               transaction.tagihan.mark_as_paid()
          db.flush()
          log_db_operation("UPDATE", "transactions", True, 1)
          return transaction

     @staticmethod
     def list_for_penyewa(db: Session, user_id: str) -> List[Transaction]:
          return (
               db.query(Transaction)
               .filter(Transaction.user_penyewa_id == user_id)
               .order_by(Transaction.created_at.desc())
               .all()
          )

     @staticmethod
     def create_rent_payment(db: Session, user, data) -> tuple[Transaction, str]:
          """
          Web rent form: pending transaction plus a Snap token whose
          order_id is the transaction id.

          Raises:
               TransactionError: 404 if the kos is missing, 500 on gateway failure.
          """
          kos = db.query(Kos).filter(Kos.id == data.kos_id).first()
          if not kos:
               raise TransactionError("Kos tidak ditemukan", status_code=404)

          transaction = Transaction(
               kos_id=kos.id,
               user_penyewa_id=user.id,
               user_penyedia_id=kos.user_id,
               amount=data.total_price,
               payment_status=PaymentStatus.PENDING.value,
               invoice_number=midtrans.generate_invoice_number(),
               start_date=data.start_date,
               duration_months=data.duration,
               ktp_number=data.ktp_number,
          )
          db.add(transaction)
          db.flush()
          log_db_operation("INSERT", "transactions", True, 1)

          customer = data.customer_details
          payload = {
               "transaction_details": {
                    "order_id": transaction.id,
                    "gross_amount": midtrans.gross_amount(data.total_price),
               },
               "customer_details": {
                    "first_name": customer.first_name,
                    "last_name": customer.last_name,
                    "email": customer.email,
                    "phone": customer.phone,
               },
               "item_details": [{
                    "id": kos.id,
                    "price": midtrans.gross_amount(data.total_price),
                    "quantity": 1,
                    "name": f"Sewa {data.kos_name or kos.name} ({data.duration} bulan)"[:50],
               }],
          }

          try:
               snap = midtrans.create_snap_transaction(payload)
          except midtrans.PaymentGatewayError as e:
               logger.error(f"Snap token for transaction {transaction.id} failed: {e}")
               raise TransactionError("Gagal membuat pembayaran", status_code=500) from e

          transaction.snap_token = snap["token"]
          db.flush()
          return transaction, snap["token"]

     @staticmethod
     def apply_notification(db: Session, order_id: str) -> Transaction:
          """
          Pull the authoritative status for a web payment and store it.

          Raises:
               TransactionError: 404 if the transaction is unknown, 502 if
                    the gateway cannot be queried.
          """
          transaction = db.query(Transaction).filter(Transaction.id == order_id).first()
          if not transaction:
               raise TransactionError("Transaksi tidak ditemukan", status_code=404)

          try:
               gateway = midtrans.get_transaction_status(order_id)
          except midtrans.PaymentGatewayError as e:
               logger.error(f"Status lookup for {order_id} failed: {e}")
               raise TransactionError("Gagal memeriksa status pembayaran", status_code=502) from e

          transaction_status = gateway.get("transaction_status")
          transaction.payment_status = midtrans.map_notification_status(
               transaction_status, gateway.get("fraud_status")
          )
          transaction.mitrans_id = gateway.get("transaction_id")
          transaction.mitrans_status = transaction_status
          transaction.payment_method = gateway.get("payment_type") or transaction.payment_method
          db.flush()
          log_db_operation("UPDATE", "transactions", True, 1)
          return transaction

     @staticmethod
     def apply_webhook(db: Session, payload: dict) -> Transaction:
          """
          Store a signed webhook notification, keyed by invoice_number.

          Signature verification happens before this is called.

          Raises:
               TransactionError: 404 if no transaction carries the order_id.
          """
          order_id = payload.get("order_id")
          transaction_status = payload.get("transaction_status")
          payment_status = midtrans.map_webhook_status(transaction_status)

          transaction = (
               db.query(Transaction)
               .filter(Transaction.invoice_number == order_id)
               .first()
          )
          if not transaction:
               raise TransactionError("Transaksi tidak ditemukan", status_code=404)

          transaction.payment_status = payment_status
          transaction.mitrans_id = payload.get("transaction_id")
          transaction.mitrans_status = transaction_status
          transaction.payment_method = payload.get("payment_type") or transaction.payment_method
          db.commit()
          log_db_operation("UPDATE", "transactions", True, 1)

          if payment_status == PaymentStatus.PAID.value and transaction.tagihan_id:
               try:
                    TransactionService._mark_tagihan_paid(db, transaction.tagihan_id)
               except Exception as e:
                    db.rollback()
                    log_db_operation("UPDATE", "tagihan", False, error=str(e))
          return transaction

     @staticmethod
     def _mark_tagihan_paid(db: Session, tagihan_id: str) -> None:
          tagihan = db.query(Tagihan).filter(Tagihan.id == tagihan_id).first()
          if not tagihan:
               raise LookupError(f"Tagihan {tagihan_id} not found")
          tagihan.mark_as_paid()
          db.commit()
          log_db_operation("UPDATE", "tagihan", True, 1)

     @staticmethod
     def list_for_dashboard(db: Session, user_id: str, is_admin: bool) -> List[Transaction]:
          """All transactions for admins, otherwise those on the caller's listings."""
          query = db.query(Transaction)
          if not is_admin:
               query = query.filter(Transaction.user_penyedia_id == user_id)
          return query.order_by(Transaction.created_at.desc()).all()

     @staticmethod
     def set_approval(db: Session, transaction_id: str, user_id: str, is_admin: bool, status: str) -> Transaction:
          """
          Approve or reject a transaction from the owner dashboard.

          Raises:
               TransactionError: 404 if the transaction is missing or not
                    on one of the caller's listings.
          """
          query = db.query(Transaction).filter(Transaction.id == transaction_id)
          if not is_admin:
               query = query.filter(Transaction.user_penyedia_id == user_id)
          transaction = query.first()
          if not transaction:
               raise TransactionError("Transaksi tidak ditemukan", status_code=404)

          transaction.payment_status = status
          db.flush()
          log_db_operation("UPDATE", "transactions", True, 1)
          return transaction
