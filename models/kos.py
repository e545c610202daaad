import enum
from sqlalchemy import (
     Boolean, CheckConstraint, Column, DateTime, Enum, ForeignKey, Integer, Numeric, String, Text, func,
)
from sqlalchemy.orm import relationship
from .base import Base, generate_uuid

# Separator used for facility lists stored as a single string column
FACILITY_DELIMITER = ", "


def _enum_values(enum_cls):
     return [member.value for member in enum_cls]


class KosStatus(str, enum.Enum):
     """Listing status."""
     ACTIVE = "active"
     INACTIVE = "inactive"
     MAINTENANCE = "maintenance"
     FULL = "full"


class GenderType(str, enum.Enum):
     PUTRA = "putra"
     PUTRI = "putri"
     CAMPUR = "campur"


class Kos(Base):
     """
     Kos model - a boarding-house listing owned by a pemilik.

     Facility columns hold delimiter-joined strings; use
     split_facilities() to read them back as lists.
     """
     __tablename__ = "kos"
     __table_args__ = (
          CheckConstraint("available_rooms <= total_rooms", name="ck_kos_available_rooms"),
     )

     id = Column(String(36), primary_key=True, default=generate_uuid)
     user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

     name = Column(String(255), nullable=False)
     address = Column(String(500), nullable=False)
     city = Column(String(100), nullable=False, index=True)
     location = Column(String(500), nullable=True)
     description = Column(Text, nullable=True)
     nomor_pemilik = Column(String(20), nullable=True)

     gender_type = Column(Enum(GenderType, name="kos_gender_type", values_callable=_enum_values), default=GenderType.CAMPUR, nullable=False)
     room_type = Column(String(100), nullable=True)

     # Rooms
     total_rooms = Column(Integer, nullable=False, default=1)
     available_rooms = Column(Integer, nullable=False, default=0)
     room_size = Column(String(50), nullable=True)

     # Pricing
     monthly_price = Column(Numeric(12, 2), nullable=False)
     yearly_price = Column(Numeric(12, 2), nullable=True)
     deposit_price = Column(Numeric(12, 2), nullable=True)
     admin_fee = Column(Numeric(12, 2), nullable=True)
     min_stay_duration = Column(Integer, nullable=True)  # months

     # Utilities
     electricity_type = Column(String(50), nullable=True)  # token, included, ...
     water_type = Column(String(50), nullable=True)

     property_status = Column(
          Enum(KosStatus, name="kos_status", create_constraint=True, values_callable=_enum_values),
          default=KosStatus.ACTIVE,
          nullable=False,
          index=True,
     )

     # Facility lists (delimiter-joined)
     fasilitas_kos = Column(Text, nullable=True)
     fasilitas_kamar = Column(Text, nullable=True)
     fasilitas_kamar_mandi = Column(Text, nullable=True)
     fasilitas_parkir = Column(Text, nullable=True)
     peraturan_kos = Column(Text, nullable=True)

     is_featured = Column(Boolean, default=False, nullable=False)
     view_count = Column(Integer, default=0, nullable=False)
     nearest_campus = Column(String(255), nullable=True)
     distance_to_campus = Column(String(50), nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

     # Relationships
     owner = relationship("User", back_populates="kos")
     images = relationship("GambarKos", back_populates="kos", cascade="all, delete-orphan")
     likes = relationship("UserLike", back_populates="kos", cascade="all, delete-orphan")
     sewa = relationship("Sewa", back_populates="kos")

     def __repr__(self):
          return f"<Kos(id={self.id}, name='{self.name}', status='{self.property_status}')>"

     @property
     def all_facilities(self) -> str:
          """All facility columns joined, for free-text search."""
          parts = [
               self.fasilitas_kos,
               self.fasilitas_kamar,
               self.fasilitas_kamar_mandi,
               self.fasilitas_parkir,
          ]
          return FACILITY_DELIMITER.join(p for p in parts if p)


def join_facilities(items) -> str | None:
     """Join a facility list into its stored string form."""
     if items is None:
          return None
     if isinstance(items, str):
          return items.strip() or None
     cleaned = [str(i).strip() for i in items if str(i).strip()]
     return FACILITY_DELIMITER.join(cleaned) if cleaned else None


def split_facilities(value: str | None) -> list[str]:
     """Split a stored facility string back into a list."""
     if not value:
          return []
     return [p.strip() for p in value.split(",") if p.strip()]
