from sqlalchemy import Column, String, Numeric, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base, generate_uuid


class Sewa(Base):
     """
     Sewa model - a lease of a kos by a penyewa.
     end_date is optional; an open-ended lease is billed one month at a time.
     """
     __tablename__ = "sewa"

     id = Column(String(36), primary_key=True, default=generate_uuid)
     kos_id = Column(String(36), ForeignKey("kos.id"), nullable=False, index=True)
     user_penyewa_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

     # Lease period
     start_date = Column(Date, nullable=False)
     end_date = Column(Date, nullable=True)

     monthly_price = Column(Numeric(12, 2), nullable=False)
     status = Column(String(50), default="active", nullable=False)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     kos = relationship("Kos", back_populates="sewa")
     penyewa = relationship("User")
     tagihan = relationship(
          "Tagihan",
          back_populates="sewa",
          cascade="all, delete-orphan",
          order_by="Tagihan.due_date",
     )

     def __repr__(self):
          return f"<Sewa(id={self.id}, kos_id={self.kos_id}, penyewa={self.user_penyewa_id})>"
