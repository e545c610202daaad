# services/__init__.py
from .sewa_service import SewaService, BillingError, generate_monthly_bills, billing_months
from .kos_service import KosService, filter_kos, to_kos_data
from .transaction_service import TransactionService, TransactionError
from .like_service import toggle_like, liked_kos, DuplicateLikeError

__all__ = [
     "SewaService",
     "BillingError",
     "generate_monthly_bills",
     "billing_months",
     "KosService",
     "filter_kos",
     "to_kos_data",
     "TransactionService",
     "TransactionError",
     "toggle_like",
     "liked_kos",
     "DuplicateLikeError",
]
