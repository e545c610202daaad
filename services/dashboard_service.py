# services/dashboard_service.py
"""
Role-based dashboard summaries.
"""
from sqlalchemy import func
from sqlalchemy.orm import Session

from models import Kos, Sewa, Tagihan, Transaction, User, UserLike
from models.tagihan import TagihanStatus
from models.transaction import PaymentStatus, SETTLED_STATUSES


def _revenue(query) -> float:
     total = query.filter(Transaction.payment_status.in_(SETTLED_STATUSES)).with_entities(
          func.coalesce(func.sum(Transaction.amount), 0)
     ).scalar()
     return float(total or 0)


def admin_summary(db: Session) -> dict:
     transactions = db.query(Transaction)
     return {
          "total_users": db.query(func.count(User.id)).scalar(),
          "total_kos": db.query(func.count(Kos.id)).scalar(),
          "total_transactions": transactions.count(),
          "pending_transactions": transactions.filter(
               Transaction.payment_status == PaymentStatus.PENDING.value
          ).count(),
          "total_revenue": _revenue(db.query(Transaction)),
     }


def pemilik_summary(db: Session, user_id: str) -> dict:
     rooms = (
          db.query(
               func.count(Kos.id),
               func.coalesce(func.sum(Kos.total_rooms), 0),
               func.coalesce(func.sum(Kos.available_rooms), 0),
          )
          .filter(Kos.user_id == user_id)
          .one()
     )
     transactions = db.query(Transaction).filter(Transaction.user_penyedia_id == user_id)
     return {
          "total_kos": rooms[0],
          "total_rooms": int(rooms[1]),
          "available_rooms": int(rooms[2]),
          "total_transactions": transactions.count(),
          "pending_transactions": transactions.filter(
               Transaction.payment_status == PaymentStatus.PENDING.value
          ).count(),
          "total_revenue": _revenue(db.query(Transaction).filter(Transaction.user_penyedia_id == user_id)),
     }


def penyewa_summary(db: Session, user_id: str) -> dict:
     unpaid = (
          db.query(func.count(Tagihan.id), func.coalesce(func.sum(Tagihan.amount), 0))
          .join(Sewa, Tagihan.sewa_id == Sewa.id)
          .filter(Sewa.user_penyewa_id == user_id, Tagihan.status == TagihanStatus.UNPAID)
          .one()
     )
     return {
          "liked_kos": db.query(func.count(UserLike.id)).filter(UserLike.user_id == user_id).scalar(),
          "active_sewa": db.query(func.count(Sewa.id))
               .filter(Sewa.user_penyewa_id == user_id, Sewa.status == "active")
               .scalar(),
          "unpaid_tagihan": unpaid[0],
          "unpaid_amount": float(unpaid[1] or 0),
     }
