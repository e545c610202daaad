from .base import Base
from .user import User
from .role import Role, RoleName, UserRole
from .kos import Kos, KosStatus, GenderType
from .gambar_kos import GambarKos, TipeGambar
from .user_like import UserLike
from .profile_penyewa import ProfilePenyewa
from .sewa import Sewa
from .tagihan import Tagihan, TagihanStatus
from .transaction import Transaction, PaymentStatus

__all__ = [
     "Base",
     "User",
     "Role",
     "RoleName",
     "UserRole",
     "Kos",
     "KosStatus",
     "GenderType",
     "GambarKos",
     "TipeGambar",
     "UserLike",
     "ProfilePenyewa",
     "Sewa",
     "Tagihan",
     "TagihanStatus",
     "Transaction",
     "PaymentStatus",
]
