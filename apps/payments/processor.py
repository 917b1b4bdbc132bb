"""
Handling of signed gateway notifications.

Both the browser-redirected callback and the server-to-server IPN go through
:class:`CallbackProcessor`. A :class:`Channel` only decides which secret signs
the answer, whether a pending order gets confirmed, and how the operator copy
of the confirmation email is labelled.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from django.conf import settings
from django.db import DatabaseError

from apps.notifications.exceptions import NotificationError
from apps.notifications.services import DEFAULT_SENDER_NAME, DEFAULT_SUBJECT, send_payment_confirmation
from apps.notifications.tasks import send_payment_confirmation_email
from apps.orders import services as order_services

from .answers import PaymentAnswer, parse_answer
from .exceptions import PaymentStorageError, PaymentVerificationError
from .models import Payment
from .services import upsert_from_answer
from .signature import verify_signature

logger = logging.getLogger(__name__)

UNKNOWN_STATUS = "UNKNOWN"
UNKNOWN_ORDER = "unknown"


@dataclass(frozen=True)
class Channel:
    name: str
    key_setting: str
    confirms_orders: bool = False
    operator_subject: str = DEFAULT_SUBJECT
    operator_sender: str = DEFAULT_SENDER_NAME

    def signing_key(self) -> str:
        return getattr(settings, self.key_setting, "")


CALLBACK = Channel(name="callback", key_setting="IZIPAY_HMACSHA256")
IPN = Channel(
    name="ipn",
    key_setting="IZIPAY_PASSWORD",
    confirms_orders=True,
    operator_subject="Pago confirmado - Admin",
    operator_sender="Sistema de Pagos",
)


@dataclass
class ProcessingResult:
    status: str
    paid: bool
    order_id: Optional[str] = None
    transaction_id: Optional[str] = None
    payment: Optional[Payment] = None
    order_confirmed: bool = False
    notification_failures: int = 0


class CallbackProcessor:
    def __init__(
        self,
        channel: Channel,
        notify: Optional[Callable[..., None]] = None,
    ) -> None:
        self.channel = channel
        self.notify = notify or send_payment_confirmation

    def process(self, raw_answer, kr_hash) -> ProcessingResult:
        answer = self.verify_and_parse(raw_answer, kr_hash)
        status = answer.order_status or UNKNOWN_STATUS

        if not answer.is_paid:
            logger.info("%s: payment not completed (status=%s)", self.channel.name, status)
            return ProcessingResult(status=status, paid=False, transaction_id=answer.transaction_id)

        payment = upsert_from_answer(answer)
        order_confirmed = False
        if self.channel.confirms_orders and answer.order_id:
            order_confirmed = self.confirm_order(answer.order_id, payment)

        order_id = answer.order_id or UNKNOWN_ORDER
        failures = self.send_confirmations(answer, order_id)
        return ProcessingResult(
            status=status,
            paid=True,
            order_id=order_id,
            transaction_id=answer.transaction_id,
            payment=payment,
            order_confirmed=order_confirmed,
            notification_failures=failures,
        )

    def verify_and_parse(self, raw_answer, kr_hash) -> PaymentAnswer:
        if not isinstance(raw_answer, str) or not isinstance(kr_hash, str):
            raise PaymentVerificationError("kr-answer or kr-hash missing or invalid")
        if not verify_signature(raw_answer, kr_hash, self.channel.signing_key()):
            logger.warning("%s: rejected notification with invalid signature", self.channel.name)
            raise PaymentVerificationError("Invalid signature")
        return parse_answer(raw_answer)

    def confirm_order(self, reference: str, payment: Payment) -> bool:
        try:
            if order_services.find_by_reference(reference) is None:
                logger.warning("%s: no order found for reference %s", self.channel.name, reference)
                return False
            confirmed = order_services.confirm_order(reference, payment=payment)
        except DatabaseError as exc:
            logger.exception("%s: could not confirm order %s", self.channel.name, reference)
            raise PaymentStorageError("Error confirming order") from exc
        if confirmed:
            logger.info("%s: order %s confirmed", self.channel.name, reference)
        return confirmed

    def send_confirmations(self, answer: PaymentAnswer, order_id: str) -> int:
        amount = answer.amount_or_zero
        messages = []
        if answer.customer_email:
            messages.append((answer.customer_email, DEFAULT_SUBJECT, DEFAULT_SENDER_NAME))
        messages.append(
            (settings.PAYMENTS_OPERATOR_EMAIL, self.channel.operator_subject, self.channel.operator_sender)
        )

        failures = 0
        for recipient, subject, sender_name in messages:
            try:
                self.notify(recipient, order_id, amount, subject=subject, sender_name=sender_name)
            except NotificationError:
                failures += 1
                logger.exception("%s: confirmation email for %s to %s failed", self.channel.name, order_id, recipient)
                self.schedule_retry(recipient, order_id, amount, subject, sender_name)
        return failures

    def schedule_retry(self, recipient: str, order_id: str, amount: int, subject: str, sender_name: str) -> None:
        try:
            send_payment_confirmation_email.delay(recipient, order_id, amount, subject=subject, sender_name=sender_name)
        except Exception:  # noqa: BLE001
            # The payment is already committed at this point.
            logger.exception("%s: could not queue confirmation retry for %s", self.channel.name, order_id)
