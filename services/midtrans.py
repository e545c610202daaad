# services/midtrans.py
"""
Midtrans payment gateway client.

Snap transactions are created over the Snap REST API with the server key
as Basic auth username. Notifications are authenticated either by the
SHA-512 signature_key Midtrans attaches to webhook payloads, or by asking
the status API for the authoritative transaction state.
"""
import base64
import hashlib
import hmac
import os
import random
import string
import time
from decimal import Decimal
from typing import Optional

import requests

MIDTRANS_SERVER_KEY = os.getenv("MIDTRANS_SERVER_KEY", "")
MIDTRANS_IS_PRODUCTION = os.getenv("MIDTRANS_IS_PRODUCTION", "false").lower() == "true"

SNAP_BASE_URL = (
     "https://app.midtrans.com" if MIDTRANS_IS_PRODUCTION else "https://app.sandbox.midtrans.com"
)
CORE_API_BASE_URL = (
     "https://api.midtrans.com" if MIDTRANS_IS_PRODUCTION else "https://api.sandbox.midtrans.com"
)

# Deep links the mobile app registers for Snap redirects
MOBILE_CALLBACKS = {
     "finish": os.getenv("MIDTRANS_FINISH_URL", "app-kos://payment/finish"),
     "error": os.getenv("MIDTRANS_ERROR_URL", "app-kos://payment/error"),
     "pending": os.getenv("MIDTRANS_PENDING_URL", "app-kos://payment/pending"),
}

REQUEST_TIMEOUT = 15


class PaymentGatewayError(Exception):
     """Raised when the gateway rejects a request or cannot be reached."""


def _midtrans_headers():
     auth = base64.b64encode(f"{MIDTRANS_SERVER_KEY}:".encode()).decode()
     return {
          "Accept": "application/json",
          "Content-Type": "application/json",
          "Authorization": f"Basic {auth}"
     }


def generate_invoice_number() -> str:
     """INV-<epoch millis>-<6 uppercase alphanumerics>."""
     alphabet = string.ascii_uppercase + string.digits
     random_part = "".join(random.choices(alphabet, k=6))
     return f"INV-{int(time.time() * 1000)}-{random_part}"


def gross_amount(amount: Decimal) -> int:
     """Midtrans expects whole rupiah."""
     return int(Decimal(amount).quantize(Decimal("1")))


def create_snap_transaction(payload: dict) -> dict:
     """
     Create a Snap transaction.

     Returns:
          {"token": ..., "redirect_url": ...}

     Raises:
          PaymentGatewayError: On transport failure or a non-2xx response.
     """
     try:
          response = requests.post(
               f"{SNAP_BASE_URL}/snap/v1/transactions",
               json=payload,
               headers=_midtrans_headers(),
               timeout=REQUEST_TIMEOUT,
          )
     except requests.RequestException as e:
          raise PaymentGatewayError(f"Midtrans unreachable: {e}") from e

     if response.status_code not in (200, 201):
          raise PaymentGatewayError(f"Midtrans error: {response.text}")

     data = response.json()
     return {
          "token": data["token"],
          "redirect_url": data.get("redirect_url"),
     }


def get_transaction_status(order_id: str) -> dict:
     """
     Fetch the authoritative status of an order from the core API.

     Raises:
          PaymentGatewayError: On transport failure or a non-2xx response.
     """
     try:
          response = requests.get(
               f"{CORE_API_BASE_URL}/v2/{order_id}/status",
               headers=_midtrans_headers(),
               timeout=REQUEST_TIMEOUT,
          )
     except requests.RequestException as e:
          raise PaymentGatewayError(f"Midtrans unreachable: {e}") from e

     if response.status_code != 200:
          raise PaymentGatewayError(f"Midtrans status error: {response.text}")
     return response.json()


def compute_signature(order_id: str, status_code: str, gross_amount_str: str, server_key: Optional[str] = None) -> str:
     """sha512(order_id + status_code + gross_amount + server_key) as hex."""
     key = MIDTRANS_SERVER_KEY if server_key is None else server_key
     raw = f"{order_id}{status_code}{gross_amount_str}{key}"
     return hashlib.sha512(raw.encode("utf-8")).hexdigest()


def _signature_part(value) -> str:
     """Render a payload value as the gateway does when signing (150000.0 -> "150000")."""
     if value is None:
          return ""
     if isinstance(value, float) and value.is_integer():
          return str(int(value))
     return str(value)


def verify_signature(payload: dict, server_key: Optional[str] = None) -> bool:
     """Check the signature_key of a webhook payload."""
     signature = payload.get("signature_key")
     if not signature:
          return False
     expected = compute_signature(
          _signature_part(payload.get("order_id")),
          _signature_part(payload.get("status_code")),
          _signature_part(payload.get("gross_amount")),
          server_key,
     )
     return hmac.compare_digest(expected, str(signature))


def map_webhook_status(transaction_status: Optional[str]) -> str:
     """Map gateway vocabulary to the local payment_status for webhooks."""
     if transaction_status in ("capture", "settlement"):
          return "paid"
     if transaction_status in ("deny", "cancel", "expire"):
          return "failed"
     return "pending"


def map_notification_status(transaction_status: Optional[str], fraud_status: Optional[str]) -> str:
     """Map gateway vocabulary (including fraud review) for status-API notifications."""
     if transaction_status == "capture":
          if fraud_status == "challenge":
               return "challenge"
          if fraud_status == "accept":
               return "success"
          return "pending"
     if transaction_status == "settlement":
          return "success"
     if transaction_status in ("cancel", "deny", "expire"):
          return "failed"
     return "pending"

