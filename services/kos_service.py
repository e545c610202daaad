# services/kos_service.py
"""
Kos Service - listing mapping, search filtering, ownership and images.
"""
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

import azure_blob
from models import GambarKos, Kos, RoleName, UserLike
from models.kos import join_facilities, split_facilities
from schemas.kos import KosData, KosImage, check_room_counts
from utils.logger import logger, log_db_operation

FACILITY_FIELDS = (
     "fasilitas_kos",
     "fasilitas_kamar",
     "fasilitas_kamar_mandi",
     "fasilitas_parkir",
     "peraturan_kos",
)

SEARCH_FETCH_LIMIT = 100


def _as_float(value) -> Optional[float]:
     return float(value) if value is not None else None


def build_image(image: GambarKos) -> KosImage:
     return KosImage(
          id=image.id,
          url_gambar=image.url_gambar,
          nama_file=image.nama_file,
          tipe_gambar_id=image.tipe_gambar_id,
          tipe_gambar=image.tipe_gambar.name if image.tipe_gambar else None,
     )


def build_kos_data(kos: Kos, include_images: bool = False, is_liked: Optional[bool] = None) -> KosData:
     """Map a Kos row to its client representation."""
     return KosData(
          id=kos.id,
          user_id=kos.user_id,
          name=kos.name,
          address=kos.address,
          city=kos.city,
          location=kos.location or "",
          description=kos.description or "",
          nomor_pemilik=kos.nomor_pemilik,
          gender_type=kos.gender_type,
          room_type=kos.room_type,
          available_rooms=kos.available_rooms,
          total_rooms=kos.total_rooms,
          monthly_price=float(kos.monthly_price),
          yearly_price=_as_float(kos.yearly_price),
          deposit_price=_as_float(kos.deposit_price),
          admin_fee=_as_float(kos.admin_fee),
          electricity_type=kos.electricity_type,
          water_type=kos.water_type,
          min_stay_duration=kos.min_stay_duration,
          room_size=kos.room_size,
          property_status=kos.property_status,
          is_featured=bool(kos.is_featured),
          view_count=kos.view_count or 0,
          nearest_campus=kos.nearest_campus,
          distance_to_campus=kos.distance_to_campus,
          images=[build_image(img) for img in kos.images] if include_images else [],
          is_liked=is_liked,
          created_at=kos.created_at,
          updated_at=kos.updated_at,
          **{field: split_facilities(getattr(kos, field)) for field in FACILITY_FIELDS},
     )


def to_kos_data(
     kos: Kos,
     include_images: bool = False,
     is_liked: Optional[bool] = None,
     camel_case: bool = True,
) -> dict:
     """JSON-ready dict for a listing; the mobile API uses snake_case keys."""
     return build_kos_data(kos, include_images, is_liked).model_dump(mode="json", by_alias=camel_case)


def parse_price(value) -> Optional[Decimal]:
     """Price bound from a query string; blank or unparsable means no bound."""
     if value is None or str(value).strip() == "":
          return None
     try:
          price = Decimal(str(value).strip())
     except InvalidOperation:
          return None
     return price if price.is_finite() else None


def filter_kos(
     kos_list: Iterable[Kos],
     search: Optional[str] = None,
     city: Optional[str] = None,
     room_type: Optional[str] = None,
     gender_type: Optional[str] = None,
     min_price=None,
     max_price=None,
) -> List[Kos]:
     """
     Filter an already fetched list of listings in memory.

     search matches case-insensitively against name, address, city,
     description and facilities. city, room_type and gender_type are
     exact matches. Price bounds are inclusive.
     """
     term = (search or "").strip().lower()
     lower = parse_price(min_price)
     upper = parse_price(max_price)

     results = []
     for kos in kos_list:
          if term:
               haystack = " ".join(
                    part for part in (
                         kos.name, kos.address, kos.city, kos.description, kos.all_facilities
                    ) if part
               ).lower()
               if term not in haystack:
                    continue
          if city and kos.city != city:
               continue
          if room_type and kos.room_type != room_type:
               continue
          if gender_type:
               value = getattr(kos.gender_type, "value", kos.gender_type)
               if value != gender_type:
                    continue
          price = Decimal(kos.monthly_price)
          if lower is not None and price < lower:
               continue
          if upper is not None and price > upper:
               continue
          results.append(kos)
     return results


class KosService:
     """Service class for listing writes and ownership checks."""

     @staticmethod
     def get_kos(db: Session, kos_id: str) -> Optional[Kos]:
          return db.query(Kos).filter(Kos.id == kos_id).first()

     @staticmethod
     def get_owned_kos(db: Session, kos_id: str, user_id: str, roles: List[str]) -> Optional[Kos]:
          """The listing if the caller owns it; admins may act on any listing."""
          query = db.query(Kos).filter(Kos.id == kos_id)
          if RoleName.ADMIN.value not in roles:
               query = query.filter(Kos.user_id == user_id)
          return query.first()

     @staticmethod
     def _apply(kos: Kos, values: dict) -> None:
          for field, value in values.items():
               if field in FACILITY_FIELDS:
                    value = join_facilities(value)
               setattr(kos, field, value)

     @staticmethod
     def create_kos(db: Session, owner_id: str, data) -> Kos:
          kos = Kos(user_id=owner_id)
          KosService._apply(kos, data.model_dump(exclude_unset=False))
          db.add(kos)
          db.flush()
          log_db_operation("INSERT", "kos", True, 1)
          return kos

     @staticmethod
     def update_kos(db: Session, kos: Kos, data) -> Kos:
          """
          Apply a partial update.

          Raises:
               ValueError: If the merged row has more available than total rooms.
          """
          values = data.model_dump(exclude_unset=True)
          total_rooms = values.get("total_rooms")
          available_rooms = values.get("available_rooms")
          check_room_counts(
               kos.total_rooms if total_rooms is None else total_rooms,
               kos.available_rooms if available_rooms is None else available_rooms,
          )
          KosService._apply(kos, values)
          db.flush()
          log_db_operation("UPDATE", "kos", True, 1)
          return kos

     @staticmethod
     def delete_kos(db: Session, kos: Kos) -> None:
          """Delete a listing and its stored images."""
          for image in list(kos.images):
               KosService._delete_blob(image)
          db.delete(kos)
          db.flush()
          log_db_operation("DELETE", "kos", True, 1)

     @staticmethod
     def add_image(db: Session, kos: Kos, file, tipe_gambar_id: Optional[int] = None) -> GambarKos:
          """Upload an image to blob storage and record it."""
          object_name, url = azure_blob.upload_to_blob(
               file, azure_blob.KOS_IMAGE_CONTAINER, kos.id
          )
          image = GambarKos(
               kos_id=kos.id,
               tipe_gambar_id=tipe_gambar_id,
               nama_file=object_name,
               url_gambar=url,
          )
          db.add(image)
          db.flush()
          log_db_operation("INSERT", "gambar_kos", True, 1)
          return image

     @staticmethod
     def delete_image(db: Session, image: GambarKos) -> None:
          KosService._delete_blob(image)
          db.delete(image)
          db.flush()
          log_db_operation("DELETE", "gambar_kos", True, 1)

     @staticmethod
     def _delete_blob(image: GambarKos) -> None:
          # A missing blob should not block removing the row
          try:
               azure_blob.delete_from_blob(azure_blob.KOS_IMAGE_CONTAINER, image.nama_file)
          except Exception as e:
               logger.error(f"Failed to delete blob {image.nama_file}: {e}")

     @staticmethod
     def liked_ids(db: Session, user_id: str) -> set:
          return {kos_id for (kos_id,) in db.query(UserLike.kos_id).filter(UserLike.user_id == user_id).all()}
