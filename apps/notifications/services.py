from __future__ import annotations

import logging
from html import escape

import requests
from django.conf import settings

from .exceptions import NotificationError

logger = logging.getLogger(__name__)

BREVO_SEND_URL = "https://api.brevo.com/v3/smtp/email"

DEFAULT_SUBJECT = "Confirmación de pago"
DEFAULT_SENDER_NAME = "Peru Travel"


def format_amount(amount: int) -> str:
    """Render minor units for display, e.g. 15000 -> ``S/ 150.00``."""
    return f"S/ {amount / 100:.2f}"


def build_confirmation_html(subject: str, order_reference: str, amount: int) -> str:
    return (
        f"<h2>{escape(subject)}</h2>"
        "<p>Tu pago fue procesado correctamente.</p>"
        f"<p><strong>Pedido:</strong> {escape(order_reference)}</p>"
        f"<p><strong>Monto:</strong> {format_amount(amount)}</p>"
    )


def send_payment_confirmation(
    recipient: str,
    order_reference: str,
    amount: int,
    subject: str = DEFAULT_SUBJECT,
    sender_name: str = DEFAULT_SENDER_NAME,
) -> None:
    api_key = getattr(settings, "BREVO_API_KEY", "")
    sender = getattr(settings, "MAIL_FROM", "")
    if not api_key or not sender:
        raise NotificationError("Email provider is not configured (BREVO_API_KEY or MAIL_FROM missing)")

    body = {
        "sender": {"email": sender, "name": sender_name},
        "to": [{"email": recipient}],
        "subject": subject,
        "htmlContent": build_confirmation_html(subject, order_reference, amount),
    }
    headers = {
        "Content-Type": "application/json",
        "api-key": api_key,
    }
    try:
        resp = requests.post(BREVO_SEND_URL, json=body, headers=headers, timeout=settings.PAYMENTS_HTTP_TIMEOUT)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise NotificationError(f"Could not send payment confirmation for {order_reference}") from exc

    logger.info("Payment confirmation for %s sent to %s", order_reference, recipient)
