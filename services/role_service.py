# services/role_service.py
"""
Role lookups over the user_role join table.

Every protected route resolves the caller's roles with a single
user -> user_role -> roles query.
"""
from typing import List

from sqlalchemy.orm import Session

from models import Role, RoleName, UserRole
from utils.logger import log_db_operation


def seed_roles(db: Session) -> None:
     """Insert any missing rows of the role catalogue."""
     existing = {name for (name,) in db.query(Role.name).all()}
     for role in RoleName:
          if role.value not in existing:
               db.add(Role(name=role.value))
     db.flush()


def get_user_roles(db: Session, user_id: str) -> List[str]:
     """Return the names of all roles held by a user."""
     rows = (
          db.query(Role.name)
          .join(UserRole, UserRole.role_id == Role.id)
          .filter(UserRole.user_id == user_id)
          .all()
     )
     return [name for (name,) in rows]


def has_role(db: Session, user_id: str, role_name: str) -> bool:
     """Check whether a user holds the given role."""
     return (
          db.query(UserRole.id)
          .join(Role, UserRole.role_id == Role.id)
          .filter(UserRole.user_id == user_id, Role.name == role_name)
          .first()
     ) is not None


def assign_role(db: Session, user_id: str, role_name: str) -> bool:
     """
     Assign a role to a user.

     Returns:
          True if the role was added, False if the user already had it.

     Raises:
          LookupError: If the role does not exist in the catalogue.
     """
     role = db.query(Role).filter(Role.name == role_name).first()
     if role is None:
          raise LookupError(f"Role {role_name} not found")

     if has_role(db, user_id, role_name):
          return False

     db.add(UserRole(user_id=user_id, role_id=role.id))
     db.flush()

     log_db_operation("INSERT", "user_role", True, 1)
     return True


def role_flags(roles: List[str]) -> dict:
     """Boolean role flags returned by the auth endpoints."""
     return {
          "isAdmin": RoleName.ADMIN.value in roles,
          "isPemilik": RoleName.PEMILIK.value in roles,
          "isUser": RoleName.USER.value in roles,
          "isPenyewa": RoleName.PENYEWA.value in roles,
     }
