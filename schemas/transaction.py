# schemas/transaction.py
"""
Pydantic schemas for gateway transactions (mobile and web flows).
"""
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TransactionCreate(BaseModel):
     """Mobile: pay one tagihan."""
     tagihan_id: str = Field(..., min_length=1)
     payment_method: Optional[str] = None
     mitrans_id: Optional[str] = None
     mitrans_status: Optional[str] = None
     notes: Optional[str] = None


class TransactionStatusUpdate(BaseModel):
     """Mobile: client-side Snap callback result."""
     order_id: str
     status: str
     transaction_status: Optional[str] = None


class ApprovalStatusEnum(str, Enum):
     APPROVED = "approved"
     REJECTED = "rejected"


class TransactionApproval(BaseModel):
     status: ApprovalStatusEnum


class CustomerDetails(BaseModel):
     first_name: str = Field(..., alias="firstName")
     last_name: Optional[str] = Field(None, alias="lastName")
     email: str
     phone: Optional[str] = None

     model_config = ConfigDict(populate_by_name=True)


class PaymentRequest(BaseModel):
     """Web rent form checkout."""
     kos_id: str = Field(..., alias="kosId")
     start_date: date = Field(..., alias="startDate")
     duration: int = Field(..., ge=1, description="Lease length in months")
     total_price: Decimal = Field(..., gt=0, alias="totalPrice")
     ktp_number: Optional[str] = Field(None, alias="ktpNumber")
     customer_details: CustomerDetails = Field(..., alias="customerDetails")
     kos_name: Optional[str] = Field(None, alias="kosName")

     model_config = ConfigDict(
          populate_by_name=True,
          json_schema_extra={
               "example": {
                    "kosId": "8d3c1f0e-2a4b-4c6d-9e8f-001122334455",
                    "startDate": "2026-11-01",
                    "duration": 3,
                    "totalPrice": 3600000,
                    "ktpNumber": "3404012345670001",
                    "customerDetails": {
                         "firstName": "Budi",
                         "lastName": "Santoso",
                         "email": "budi@example.com",
                         "phone": "081234567890",
                    },
                    "kosName": "Kos Nyaman Sejahtera",
               }
          },
     )


class PaymentNotification(BaseModel):
     order_id: str


class TransactionResponse(BaseModel):
     id: str
     tagihan_id: Optional[str] = None
     kos_id: Optional[str] = None
     user_penyewa_id: str
     user_penyedia_id: Optional[str] = None
     amount: float
     payment_status: str
     payment_method: Optional[str] = None
     invoice_number: str
     mitrans_id: Optional[str] = None
     mitrans_status: Optional[str] = None
     snap_token: Optional[str] = None
     start_date: Optional[date] = None
     duration_months: Optional[int] = None
     notes: Optional[str] = None
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)

     @field_validator("payment_status", mode="before")
     @classmethod
     def _enum_value(cls, value):
          return getattr(value, "value", value)
