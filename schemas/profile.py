# schemas/profile.py
from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GenderEnum(str, Enum):
     MALE = "male"
     FEMALE = "female"


class ProfilePenyewaUpsert(BaseModel):
     """Tenant profile form; every field is required."""
     full_name: str = Field(..., min_length=1, max_length=200)
     phone_number: str = Field(..., min_length=1, max_length=50)
     gender: GenderEnum
     date_of_birth: date
     address: str = Field(..., min_length=1)
     emergency_contact: str = Field(..., min_length=1, max_length=100)

     @field_validator("full_name", "phone_number", "address", "emergency_contact", mode="before")
     @classmethod
     def _strip(cls, value):
          if isinstance(value, str):
               return value.strip()
          return value


class ProfilePenyewaResponse(BaseModel):
     user_id: str
     full_name: str
     phone_number: str
     gender: str
     date_of_birth: date
     address: str
     emergency_contact: str
     updated_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)
