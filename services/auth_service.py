# services/auth_service.py
"""
Password hashing and JWT issuing/verification.
"""
import os
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from models import User

SECRET_KEY = os.getenv("JWT_SECRET", "change-me")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "30"))
OTP_TTL_MINUTES = 10
OTP_MAX_ATTEMPTS = 5

# Bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class TokenError(Exception):
     """Raised when a token cannot be decoded or has the wrong type."""


def hash_password(password: str) -> str:
     return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
     return pwd_context.verify(password, hashed)


def _encode(user: User, token_type: str, expires_delta: timedelta) -> tuple[str, int]:
     expire = datetime.now(timezone.utc) + expires_delta
     payload = {
          "sub": user.id,
          "email": user.email,
          "type": token_type,
          "exp": expire,
     }
     return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM), int(expire.timestamp())


def create_token_pair(user: User) -> dict:
     """Issue an access/refresh token pair for a user."""
     access_token, expires_at = _encode(
          user, "access", timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
     )
     refresh_token, _ = _encode(user, "refresh", timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS))
     return {
          "access_token": access_token,
          "refresh_token": refresh_token,
          "expires_in": ACCESS_TOKEN_EXPIRE_MINUTES * 60,
          "expires_at": expires_at,
          "token_type": "bearer",
     }


def decode_token(token: str, expected_type: str = "access") -> dict:
     """
     Decode and validate a JWT.

     Raises:
          TokenError: If the signature, expiry or token type is invalid.
     """
     try:
          payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
     except JWTError as e:
          raise TokenError(str(e)) from e

     if payload.get("type") != expected_type or not payload.get("sub"):
          raise TokenError("Wrong token type")
     return payload


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
     """Return the user when email and password match, else None."""
     user = db.query(User).filter(User.email == email.lower()).first()
     if not user or not verify_password(password, user.password):
          return None
     return user


def issue_reset_otp(user: User) -> str:
     """Generate a 6-digit OTP and store it on the user."""
     otp = f"{secrets.randbelow(1_000_000):06d}"
     user.pending_otp = otp
     user.otp_expires_at = datetime.utcnow() + timedelta(minutes=OTP_TTL_MINUTES)
     user.otp_attempts = 0
     return otp


def consume_reset_otp(user: User, otp: str) -> bool:
     """
     Check and clear a pending OTP. Returns False if wrong or expired.

     Wrong guesses are counted; after OTP_MAX_ATTEMPTS the OTP is
     discarded and a new one has to be requested.
     """
     if not user.pending_otp or not user.otp_expires_at:
          return False
     if user.otp_expires_at < datetime.utcnow():
          return False
     if not secrets.compare_digest(user.pending_otp.encode(), otp.encode()):
          user.otp_attempts = (user.otp_attempts or 0) + 1
          if user.otp_attempts >= OTP_MAX_ATTEMPTS:
               _clear_otp(user)
          return False
     _clear_otp(user)
     return True


def _clear_otp(user: User) -> None:
     user.pending_otp = None
     user.otp_expires_at = None
     user.otp_attempts = 0
