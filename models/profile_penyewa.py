from sqlalchemy import Column, Date, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import relationship
from .base import Base


class ProfilePenyewa(Base):
     """
     Tenant profile filled in from the mobile app.
     One row per user (user_id is the primary key).
     """
     __tablename__ = "profile_penyewa"

     user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
     full_name = Column(String(200), nullable=False)
     phone_number = Column(String(50), nullable=False)
     gender = Column(String(10), nullable=False)  # male, female
     date_of_birth = Column(Date, nullable=False)
     address = Column(Text, nullable=False)
     emergency_contact = Column(String(100), nullable=False)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

     user = relationship("User", back_populates="profile")

     def __repr__(self):
          return f"<ProfilePenyewa(user_id={self.user_id}, name='{self.full_name}')>"
