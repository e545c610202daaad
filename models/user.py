# models/user.py
from sqlalchemy import Column, String, DateTime, Integer, func
from sqlalchemy.orm import relationship
from .base import Base, generate_uuid


class User(Base):
     """
     User model - central authentication table.
     Roles are assigned through the user_role join table.
     """
     __tablename__ = "users"

     id = Column(String(36), primary_key=True, default=generate_uuid)
     email = Column(String(255), unique=True, nullable=False, index=True)
     password = Column(String(255), nullable=False)
     name = Column(String(200), nullable=True)
     phone = Column(String(50), nullable=True)
     avatar_url = Column(String(500), nullable=True)

     # Password reset
     pending_otp = Column(String(10), nullable=True)
     otp_expires_at = Column(DateTime, nullable=True)
     otp_attempts = Column(Integer, default=0, nullable=False)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

     # Relationships
     user_roles = relationship("UserRole", back_populates="user", cascade="all, delete-orphan")
     kos = relationship("Kos", back_populates="owner")
     likes = relationship("UserLike", back_populates="user", cascade="all, delete-orphan")
     profile = relationship("ProfilePenyewa", back_populates="user", uselist=False, cascade="all, delete-orphan")

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}')>"
