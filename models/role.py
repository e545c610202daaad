# models/role.py
"""
Role catalogue and the many-to-many user_role assignment table.
"""
import enum
from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base


class RoleName(str, enum.Enum):
     """Role names stored in the roles table."""
     ADMIN = "admin"
     PEMILIK = "pemilik"  # listing owner
     USER = "user"  # web tenant
     PENYEWA = "penyewa"  # mobile tenant


class Role(Base):
     __tablename__ = "roles"

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(50), unique=True, nullable=False)

     user_roles = relationship("UserRole", back_populates="role")

     def __repr__(self):
          return f"<Role(id={self.id}, name='{self.name}')>"


class UserRole(Base):
     __tablename__ = "user_role"
     __table_args__ = (UniqueConstraint("user_id", "role_id", name="uq_user_role_user_role"),)

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
     role_id = Column(Integer, ForeignKey("roles.id", ondelete="CASCADE"), nullable=False)

     user = relationship("User", back_populates="user_roles")
     role = relationship("Role", back_populates="user_roles")

     def __repr__(self):
          return f"<UserRole(user_id={self.user_id}, role_id={self.role_id})>"
