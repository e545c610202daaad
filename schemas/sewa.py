# schemas/sewa.py
"""
Pydantic schemas for leases (sewa) and their monthly bills (tagihan).
"""
from datetime import date, datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


def parse_date(value, field_name: str) -> Optional[date]:
     """Accept YYYY-MM-DD or a full ISO timestamp; None passes through."""
     if value is None or value == "":
          return None
     if isinstance(value, datetime):
          return value.date()
     if isinstance(value, date):
          return value
     try:
          return datetime.fromisoformat(str(value).replace("Z", "+00:00")).date()
     except ValueError:
          raise ValueError(f"{field_name} tidak valid")


class SewaCreate(BaseModel):
     """Mobile rent request. monthly_price is only used when the kos has none."""
     kos_id: Optional[str] = None
     start_date: Optional[date] = None
     end_date: Optional[date] = None
     monthly_price: Optional[Union[float, str]] = None

     @field_validator("start_date", mode="before")
     @classmethod
     def _parse_start(cls, value):
          return parse_date(value, "start_date")

     @field_validator("end_date", mode="before")
     @classmethod
     def _parse_end(cls, value):
          return parse_date(value, "end_date")

     @model_validator(mode="after")
     def _required(self):
          if not self.kos_id or self.start_date is None:
               raise ValueError("kos_id dan start_date harus disertakan")
          return self


class TagihanResponse(BaseModel):
     id: str
     sewa_id: str
     billing_month: int
     billing_year: int
     amount: float
     due_date: date
     status: str
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)

     @field_validator("status", mode="before")
     @classmethod
     def _enum_value(cls, value):
          return getattr(value, "value", value)


class SewaResponse(BaseModel):
     id: str
     kos_id: str
     user_penyewa_id: str
     start_date: date
     end_date: Optional[date] = None
     monthly_price: float
     status: str
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class SewaWithTagihan(SewaResponse):
     tagihan: List[TagihanResponse] = []
