# services/sewa_service.py
"""
Sewa Service - lease creation and monthly tagihan generation.

A lease produces one tagihan per calendar month it covers. The tagihan
rows are written after the sewa row; if they cannot be written the sewa
row is deleted again so no lease is left without its bills.
"""
from calendar import monthrange
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from models import Kos, Sewa, Tagihan
from models.tagihan import TagihanStatus
from utils.logger import logger, log_db_operation


class BillingError(ValueError):
     """Raised when a lease request cannot be billed."""

     def __init__(self, message: str, status_code: int = 400):
          super().__init__(message)
          self.status_code = status_code


def add_months(start: date, months: int) -> date:
     """Shift a date by whole months, clamping the day to the month length."""
     month_index = start.month - 1 + months
     year = start.year + month_index // 12
     month = month_index % 12 + 1
     day = min(start.day, monthrange(year, month)[1])
     return date(year, month, day)


def billing_months(start_date: date, end_date: Optional[date] = None) -> List[date]:
     """
     Dates whose (year, month) get a tagihan.

     The first entry is start_date itself. Further entries are
     start_date + k months while they do not pass end_date. Without an
     end_date the lease is billed for its first month only.
     """
     months = [start_date]
     if end_date is None:
          return months

     index = 1
     current = add_months(start_date, index)
     while current <= end_date:
          months.append(current)
          index += 1
          current = add_months(start_date, index)
     return months


def generate_monthly_bills(
     start_date: date,
     end_date: Optional[date],
     amount: Decimal,
) -> List[dict]:
     """
     Build the tagihan payloads for a lease period.

     Each bill is due on the first day of its billing month.
     """
     bills = []
     for current in billing_months(start_date, end_date):
          bills.append({
               "billing_month": current.month,
               "billing_year": current.year,
               "amount": amount,
               "due_date": date(current.year, current.month, 1),
               "status": TagihanStatus.UNPAID,
          })
     return bills


class SewaService:
     """Service class for lease-related business logic."""

     @staticmethod
     def resolve_monthly_price(kos: Kos, fallback: Optional[object] = None) -> Decimal:
          """
          Monthly price for a lease: the listing price, or the price sent
          by the client when the listing has none.

          Raises:
               BillingError: If the price is missing, not numeric or not positive.
          """
          source = kos.monthly_price if kos.monthly_price is not None else fallback
          try:
               price = Decimal(str(source))
          except (ArithmeticError, ValueError, TypeError):
               raise BillingError("monthly_price tidak valid")
          if not price.is_finite() or price <= 0:
               raise BillingError("monthly_price tidak valid")
          return price

     @staticmethod
     def insert_tagihan(db: Session, sewa: Sewa, bills: List[dict]) -> List[Tagihan]:
          """Insert the tagihan rows for a sewa in one flush."""
          rows = [Tagihan(sewa_id=sewa.id, **bill) for bill in bills]
          db.add_all(rows)
          db.flush()
          return rows

     @staticmethod
     def create_sewa(
          db: Session,
          kos_id: str,
          penyewa_id: str,
          start_date: date,
          end_date: Optional[date] = None,
          monthly_price: Optional[object] = None,
     ) -> tuple[Sewa, Optional[Tagihan]]:
          """
          Create a lease and its monthly bills.

          Args:
               db: SQLAlchemy database session
               kos_id: Listing being rented
               penyewa_id: Tenant user id
               start_date: First day of the lease
               end_date: Optional last day of the lease
               monthly_price: Fallback price when the listing has none

          Returns:
               (sewa, tagihan for the start month or None)

          Raises:
               BillingError: Validation failure (400), missing kos (404)
                    or bill insertion failure (500, sewa removed).
          """
          if end_date is not None and end_date < start_date:
               raise BillingError("end_date tidak boleh sebelum start_date")

          kos = db.query(Kos).filter(Kos.id == kos_id).first()
          if not kos:
               raise BillingError("Kos tidak ditemukan", status_code=404)

          price = SewaService.resolve_monthly_price(kos, monthly_price)

          sewa = Sewa(
               kos_id=kos.id,
               user_penyewa_id=penyewa_id,
               start_date=start_date,
               end_date=end_date,
               monthly_price=price,
               status="active",
          )
          db.add(sewa)
          db.commit()
          log_db_operation("INSERT", "sewa", True, 1)

          bills = generate_monthly_bills(start_date, end_date, price)
          try:
               created = SewaService.insert_tagihan(db, sewa, bills)
               db.commit()
          except Exception as e:
               db.rollback()
               log_db_operation("INSERT", "tagihan", False, error=str(e))
               SewaService.delete_sewa(db, sewa.id)
               raise BillingError("Gagal membuat tagihan bulanan", status_code=500) from e

          log_db_operation("INSERT", "tagihan", True, len(created))

          current_bill = next(
               (
                    bill for bill in created
                    if bill.billing_month == start_date.month and bill.billing_year == start_date.year
               ),
               None,
          )
          return sewa, current_bill

     @staticmethod
     def delete_sewa(db: Session, sewa_id: str) -> None:
          """Compensating delete for a sewa whose bills could not be created."""
          deleted = db.query(Sewa).filter(Sewa.id == sewa_id).delete(synchronize_session=False)
          db.commit()
          log_db_operation("DELETE", "sewa", True, deleted)
          logger.warning(f"Sewa {sewa_id} removed after tagihan insert failure")

     @staticmethod
     def list_for_penyewa(db: Session, penyewa_id: str) -> List[Sewa]:
          return (
               db.query(Sewa)
               .filter(Sewa.user_penyewa_id == penyewa_id)
               .order_by(Sewa.created_at.desc())
               .all()
          )
