import enum
from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from .base import Base, generate_uuid


class TagihanStatus(str, enum.Enum):
     """Monthly invoice payment status."""
     UNPAID = "unpaid"
     PAID = "paid"


class Tagihan(Base):
     """
     Tagihan model - one month's invoice generated against a sewa.
     """
     __tablename__ = "tagihan"

     id = Column(String(36), primary_key=True, default=generate_uuid)
     sewa_id = Column(
          String(36),
          ForeignKey("sewa.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )

     billing_month = Column(Integer, nullable=False)
     billing_year = Column(Integer, nullable=False)
     amount = Column(Numeric(12, 2), nullable=False)
     due_date = Column(Date, nullable=False, index=True)
     status = Column(
          Enum(
               TagihanStatus,
               name="tagihan_status",
               create_constraint=True,
               values_callable=lambda e: [m.value for m in e],
          ),
          default=TagihanStatus.UNPAID,
          nullable=False,
          index=True
     )

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

     # Relationships
     sewa = relationship("Sewa", back_populates="tagihan")
     transactions = relationship("Transaction", back_populates="tagihan")

     def __repr__(self):
          return f"<Tagihan(id={self.id}, {self.billing_year}-{self.billing_month:02d}, status='{self.status.value}')>"

     def mark_as_paid(self) -> None:
          """Mark the invoice as paid."""
          self.status = TagihanStatus.PAID
