# schemas/auth.py
"""
Pydantic schemas for registration, login and password reset.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator


PASSWORD_MISMATCH = "Password dan konfirmasi password tidak sama"


class RegisterRequest(BaseModel):
     """Registration form (web and mobile)."""
     email: EmailStr
     password: str = Field(..., min_length=6)
     confirm_password: str = Field(..., alias="confirmPassword")
     name: Optional[str] = Field(None, max_length=200)
     phone: Optional[str] = Field(None, max_length=50)

     model_config = ConfigDict(
          populate_by_name=True,
          json_schema_extra={
               "example": {
                    "email": "budi@example.com",
                    "password": "rahasia123",
                    "confirmPassword": "rahasia123",
                    "name": "Budi Santoso",
               }
          },
     )

     @field_validator("email")
     @classmethod
     def _lower_email(cls, value: str) -> str:
          return value.lower()

     @model_validator(mode="after")
     def _passwords_match(self):
          if self.password != self.confirm_password:
               raise ValueError(PASSWORD_MISMATCH)
          return self


class LoginRequest(BaseModel):
     email: EmailStr
     password: str = Field(..., min_length=1)


class RefreshTokenRequest(BaseModel):
     refresh_token: Optional[str] = None


class ForgotPasswordRequest(BaseModel):
     email: EmailStr


class ResetPasswordRequest(BaseModel):
     email: EmailStr
     otp: str = Field(..., min_length=6, max_length=6)
     password: str = Field(..., min_length=6)
     confirm_password: str = Field(..., alias="confirmPassword")

     model_config = ConfigDict(populate_by_name=True)

     @model_validator(mode="after")
     def _passwords_match(self):
          if self.password != self.confirm_password:
               raise ValueError(PASSWORD_MISMATCH)
          return self


class AssignAdminRequest(BaseModel):
     user_id: str = Field(..., alias="userId")

     model_config = ConfigDict(populate_by_name=True)
