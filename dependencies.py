# dependencies.py
"""
Shared FastAPI dependencies: bearer-token authentication and role checks.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from database import get_session
from models import RoleName, User
from services.auth_service import TokenError, decode_token
from services.role_service import get_user_roles

# auto_error=False so a missing header gets our own 401 message
security = HTTPBearer(auto_error=False)

TOKEN_MISSING = "Unauthorized: Token tidak ditemukan"
TOKEN_INVALID = "Unauthorized: Token tidak valid atau kadaluarsa"


@dataclass
class AuthContext:
     """The authenticated caller and the names of the roles they hold."""
     user: User
     roles: List[str] = field(default_factory=list)

     @property
     def id(self) -> str:
          return self.user.id

     @property
     def is_admin(self) -> bool:
          return RoleName.ADMIN.value in self.roles


def get_current_user(
     db: Session = Depends(get_session),
     credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> User:
     """
     Resolve the user behind the Authorization: Bearer header.

     Raises:
          HTTPException: 401 when the header is missing, the token is
               invalid or expired, or the user no longer exists.
     """
     if not credentials or not credentials.credentials:
          raise HTTPException(
               status_code=status.HTTP_401_UNAUTHORIZED,
               detail=TOKEN_MISSING,
               headers={"WWW-Authenticate": "Bearer"},
          )

     try:
          payload = decode_token(credentials.credentials)
     except TokenError:
          raise HTTPException(
               status_code=status.HTTP_401_UNAUTHORIZED,
               detail=TOKEN_INVALID,
               headers={"WWW-Authenticate": "Bearer"},
          )

     user = db.query(User).filter(User.id == payload["sub"]).first()
     if not user:
          raise HTTPException(
               status_code=status.HTTP_401_UNAUTHORIZED,
               detail=TOKEN_INVALID,
               headers={"WWW-Authenticate": "Bearer"},
          )
     return user


def get_auth_context(
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
) -> AuthContext:
     return AuthContext(user=user, roles=get_user_roles(db, user.id))


def require_role(*role_names: str):
     """Dependency factory: 403 unless the caller holds one of role_names."""

     def _checker(ctx: AuthContext = Depends(get_auth_context)) -> AuthContext:
          if not any(name in ctx.roles for name in role_names):
               raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="Akses ditolak",
               )
          return ctx

     return _checker
