# routers/__init__.py
from . import auth, dashboard, kos, mobile_auth, mobile_kos, payments, profile, sewa, transactions, users

__all__ = [
     "auth",
     "dashboard",
     "kos",
     "mobile_auth",
     "mobile_kos",
     "payments",
     "profile",
     "sewa",
     "transactions",
     "users",
]
