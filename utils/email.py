# utils/email.py
import os

import requests

from utils.logger import logger

BREVO_KEY = os.getenv("BREVO_API_KEY")
BREVO_URL = "https://api.brevo.com/v3/smtp/email"
SENDER = {
     "name": os.getenv("EMAIL_SENDER_NAME", "KosKu"),
     "email": os.getenv("EMAIL_SENDER_ADDRESS", "noreply@kosku.id"),
}


class EmailDeliveryError(Exception):
     """Brevo is not configured or refused the message."""


def _send(to_email: str, subject: str, html: str) -> None:
     if not BREVO_KEY:
          raise EmailDeliveryError("BREVO_API_KEY is not set")

     try:
          response = requests.post(
               BREVO_URL,
               headers={"api-key": BREVO_KEY, "Content-Type": "application/json"},
               json={
                    "sender": SENDER,
                    "to": [{"email": to_email}],
                    "subject": subject,
                    "htmlContent": html,
               },
               timeout=10,
          )
     except requests.RequestException as e:
          raise EmailDeliveryError(f"Brevo unreachable: {e}") from e

     if response.status_code not in (200, 201):
          raise EmailDeliveryError(f"Brevo error: {response.text}")
     logger.info(f"Email '{subject}' sent to {to_email}")


def send_reset_otp_email(to_email: str, otp: str, ttl_minutes: int = 10) -> None:
     """Send the password-reset code."""
     _send(
          to_email,
          "Kode reset password KosKu",
          f"""
               <h2>Kode reset password Anda</h2>
               <h1 style="color:#2563EB;letter-spacing:4px">{otp}</h1>
               <p>Kode ini berlaku selama {ttl_minutes} menit.
               Abaikan email ini jika Anda tidak meminta reset password.</p>
          """,
     )
