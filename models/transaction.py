# models/transaction.py
"""
Transaction model - a payment attempt through the gateway.

Mobile payments reference a tagihan and are keyed by invoice_number
(the gateway order_id). Web rent-form payments reference a kos directly
and use the transaction id as order_id.
"""
import enum
from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, Text, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base, generate_uuid


class PaymentStatus(str, enum.Enum):
     PENDING = "pending"
     PAID = "paid"
     SUCCESS = "success"
     FAILED = "failed"
     CHALLENGE = "challenge"
     APPROVED = "approved"
     REJECTED = "rejected"


# Statuses that count as money received
SETTLED_STATUSES = (PaymentStatus.PAID.value, PaymentStatus.SUCCESS.value, PaymentStatus.APPROVED.value)


class Transaction(Base):
     __tablename__ = "transactions"

     id = Column(String(36), primary_key=True, default=generate_uuid)

     tagihan_id = Column(String(36), ForeignKey("tagihan.id", ondelete="SET NULL"), nullable=True, index=True)
     kos_id = Column(String(36), ForeignKey("kos.id", ondelete="SET NULL"), nullable=True, index=True)
     user_penyewa_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
     user_penyedia_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)

     amount = Column(Numeric(12, 2), nullable=False)
     payment_status = Column(String(20), default=PaymentStatus.PENDING.value, nullable=False, index=True)
     payment_method = Column(String(50), nullable=True)
     invoice_number = Column(String(64), unique=True, nullable=False, index=True)

     # Gateway identifiers
     mitrans_id = Column(String(100), nullable=True)
     mitrans_status = Column(String(50), nullable=True)
     snap_token = Column(String(255), nullable=True)

     # Web rent form
     start_date = Column(Date, nullable=True)
     duration_months = Column(Integer, nullable=True)
     ktp_number = Column(String(32), nullable=True)

     notes = Column(Text, nullable=True)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

     tagihan = relationship("Tagihan", back_populates="transactions")
     kos = relationship("Kos")
     penyewa = relationship("User", foreign_keys=[user_penyewa_id])
     penyedia = relationship("User", foreign_keys=[user_penyedia_id])

     def __repr__(self):
          return f"<Transaction(id={self.id}, invoice='{self.invoice_number}', status='{self.payment_status}')>"
