# schemas/__init__.py
from .auth import (
     RegisterRequest,
     LoginRequest,
     RefreshTokenRequest,
     ForgotPasswordRequest,
     ResetPasswordRequest,
     AssignAdminRequest,
)
from .kos import KosCreate, KosUpdate, KosData, KosImage
from .profile import ProfilePenyewaUpsert, ProfilePenyewaResponse
from .sewa import SewaCreate, SewaResponse, SewaWithTagihan, TagihanResponse
from .transaction import (
     TransactionCreate,
     TransactionStatusUpdate,
     TransactionApproval,
     TransactionResponse,
     PaymentRequest,
     PaymentNotification,
)

__all__ = [
     "RegisterRequest",
     "LoginRequest",
     "RefreshTokenRequest",
     "ForgotPasswordRequest",
     "ResetPasswordRequest",
     "AssignAdminRequest",
     "KosCreate",
     "KosUpdate",
     "KosData",
     "KosImage",
     "ProfilePenyewaUpsert",
     "ProfilePenyewaResponse",
     "SewaCreate",
     "SewaResponse",
     "SewaWithTagihan",
     "TagihanResponse",
     "TransactionCreate",
     "TransactionStatusUpdate",
     "TransactionApproval",
     "TransactionResponse",
     "PaymentRequest",
     "PaymentNotification",
]
