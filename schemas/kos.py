# schemas/kos.py
"""
Pydantic schemas for kos listing requests and responses.

Requests accept both camelCase (web form) and snake_case (mobile) keys.
"""
import re
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from models.kos import GenderType, KosStatus

PHONE_REGEX = re.compile(r"^(\+62|62|0)8[1-9][0-9]{6,9}$")

ROOM_COUNT_MESSAGE = "Kamar tersedia tidak boleh lebih dari total kamar."
PHONE_MESSAGE = "Nomor pemilik tidak valid (minimal 10-13 digit)."

FacilityList = Optional[Union[List[str], str]]

# Columns a partial update may omit but never null out
REQUIRED_ON_UPDATE = (
     "name", "address", "city", "room_type", "nomor_pemilik", "monthly_price",
     "total_rooms", "available_rooms", "gender_type", "property_status", "is_featured",
)


def normalize_phone(value: str) -> str:
     """Strip whitespace and check an Indonesian mobile number."""
     cleaned = re.sub(r"\s", "", value)
     if not PHONE_REGEX.match(cleaned):
          raise ValueError(PHONE_MESSAGE)
     return cleaned


def check_room_counts(total_rooms: int, available_rooms: int) -> None:
     if available_rooms > total_rooms:
          raise ValueError(ROOM_COUNT_MESSAGE)


class _KosFields(BaseModel):
     model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

     @field_validator("name", "address", "city", "room_type", check_fields=False)
     @classmethod
     def _strip_required(cls, value):
          if value is None:
               return value
          value = value.strip()
          if not value:
               raise ValueError("Mohon lengkapi semua field yang wajib diisi.")
          return value

     @field_validator("nomor_pemilik", check_fields=False)
     @classmethod
     def _check_phone(cls, value):
          if value is None:
               return value
          return normalize_phone(value)


class KosCreate(_KosFields):
     """Whole-form schema for a new listing."""
     name: str
     address: str
     city: str
     room_type: str
     nomor_pemilik: str
     monthly_price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
     total_rooms: int = Field(..., ge=1)
     available_rooms: int = Field(..., ge=0)

     location: Optional[str] = None
     description: Optional[str] = None
     gender_type: GenderType = GenderType.CAMPUR
     room_size: Optional[str] = None
     yearly_price: Optional[Decimal] = Field(None, ge=0)
     deposit_price: Optional[Decimal] = Field(None, ge=0)
     admin_fee: Optional[Decimal] = Field(None, ge=0)
     min_stay_duration: Optional[int] = Field(None, ge=1)
     electricity_type: Optional[str] = None
     water_type: Optional[str] = None
     property_status: KosStatus = KosStatus.ACTIVE
     fasilitas_kos: FacilityList = None
     fasilitas_kamar: FacilityList = None
     fasilitas_kamar_mandi: FacilityList = None
     fasilitas_parkir: FacilityList = None
     peraturan_kos: FacilityList = None
     nearest_campus: Optional[str] = None
     distance_to_campus: Optional[str] = None

     @model_validator(mode="after")
     def _available_within_total(self):
          check_room_counts(self.total_rooms, self.available_rooms)
          return self

     model_config = ConfigDict(
          populate_by_name=True,
          alias_generator=to_camel,
          json_schema_extra={
               "example": {
                    "name": "Kos Nyaman Sejahtera",
                    "address": "Jl. Kaliurang KM 5 No. 12",
                    "city": "Yogyakarta",
                    "roomType": "Kamar mandi dalam",
                    "nomorPemilik": "081234567890",
                    "monthlyPrice": 1200000,
                    "totalRooms": 10,
                    "availableRooms": 4,
                    "genderType": "putri",
                    "fasilitasKamar": ["Kasur", "Lemari", "AC"],
               }
          },
     )


class KosUpdate(_KosFields):
     """Partial update; room counts are re-checked against the stored row."""
     name: Optional[str] = None
     address: Optional[str] = None
     city: Optional[str] = None
     room_type: Optional[str] = None
     nomor_pemilik: Optional[str] = None
     monthly_price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     total_rooms: Optional[int] = Field(None, ge=1)
     available_rooms: Optional[int] = Field(None, ge=0)
     location: Optional[str] = None
     description: Optional[str] = None
     gender_type: Optional[GenderType] = None
     room_size: Optional[str] = None
     yearly_price: Optional[Decimal] = Field(None, ge=0)
     deposit_price: Optional[Decimal] = Field(None, ge=0)
     admin_fee: Optional[Decimal] = Field(None, ge=0)
     min_stay_duration: Optional[int] = Field(None, ge=1)
     electricity_type: Optional[str] = None
     water_type: Optional[str] = None
     property_status: Optional[KosStatus] = None
     fasilitas_kos: FacilityList = None
     fasilitas_kamar: FacilityList = None
     fasilitas_kamar_mandi: FacilityList = None
     fasilitas_parkir: FacilityList = None
     peraturan_kos: FacilityList = None
     nearest_campus: Optional[str] = None
     distance_to_campus: Optional[str] = None
     is_featured: Optional[bool] = None

     @model_validator(mode="after")
     def _required_not_null(self):
          for field in REQUIRED_ON_UPDATE:
               if field in self.model_fields_set and getattr(self, field) is None:
                    raise ValueError(f"{field} tidak boleh kosong")
          return self


class KosImage(BaseModel):
     model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

     id: str
     url_gambar: str
     nama_file: str
     tipe_gambar_id: Optional[int] = None
     tipe_gambar: Optional[str] = None


class KosData(BaseModel):
     """Listing as returned to clients (camelCase, facility lists split)."""
     model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

     id: str
     user_id: str
     name: str
     address: str
     city: str
     location: str = ""
     description: str = ""
     nomor_pemilik: Optional[str] = None
     gender_type: GenderType
     room_type: Optional[str] = None
     available_rooms: int
     total_rooms: int
     monthly_price: float
     yearly_price: Optional[float] = None
     deposit_price: Optional[float] = None
     admin_fee: Optional[float] = None
     electricity_type: Optional[str] = None
     water_type: Optional[str] = None
     min_stay_duration: Optional[int] = None
     room_size: Optional[str] = None
     property_status: KosStatus
     is_featured: bool = False
     view_count: int = 0
     nearest_campus: Optional[str] = None
     distance_to_campus: Optional[str] = None
     # Facility keys keep their column names
     fasilitas_kos: List[str] = Field(default_factory=list, alias="fasilitas_kos")
     fasilitas_kamar: List[str] = Field(default_factory=list, alias="fasilitas_kamar")
     fasilitas_kamar_mandi: List[str] = Field(default_factory=list, alias="fasilitas_kamar_mandi")
     fasilitas_parkir: List[str] = Field(default_factory=list, alias="fasilitas_parkir")
     peraturan_kos: List[str] = Field(default_factory=list, alias="peraturan_kos")
     images: List[KosImage] = Field(default_factory=list)
     is_liked: Optional[bool] = None
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None
