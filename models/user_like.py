from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import relationship
from .base import Base, generate_uuid


class UserLike(Base):
     """A user's favorite kos."""
     __tablename__ = "user_likes"
     __table_args__ = (UniqueConstraint("user_id", "kos_id", name="uq_user_likes_user_kos"),)

     id = Column(String(36), primary_key=True, default=generate_uuid)
     user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
     kos_id = Column(String(36), ForeignKey("kos.id", ondelete="CASCADE"), nullable=False, index=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     user = relationship("User", back_populates="likes")
     kos = relationship("Kos", back_populates="likes")

     def __repr__(self):
          return f"<UserLike(user_id={self.user_id}, kos_id={self.kos_id})>"
