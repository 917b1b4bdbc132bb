from __future__ import annotations

import logging

from django.conf import settings
from django.db import DatabaseError, transaction

from .answers import PaymentAnswer
from .exceptions import PaymentStorageError
from .models import Payment

logger = logging.getLogger(__name__)


def identity_key_for(answer: PaymentAnswer) -> str | None:
    if answer.transaction_id:
        return f"txn:{answer.transaction_id}"
    if answer.order_id:
        return f"order:{answer.order_id}"
    return None


def _merge_into(payment: Payment, answer: PaymentAnswer) -> None:
    if answer.order_status is not None:
        payment.status = answer.order_status
    if answer.paid_amount is not None:
        payment.amount = answer.paid_amount
    payment.raw_answer = answer.raw

    # Only fill gaps; a sparser retry must not erase what we already know.
    if not payment.transaction_id and answer.transaction_id:
        payment.transaction_id = answer.transaction_id
    if not payment.order_reference and answer.order_id:
        payment.order_reference = answer.order_id
    if not payment.customer_email and answer.customer_email:
        payment.customer_email = answer.customer_email


def upsert_from_answer(answer: PaymentAnswer) -> Payment:
    """
    Record a verified answer, creating or updating the row for its identity key.

    The lookup-or-insert runs in one transaction against the unique
    ``identity_key`` column: the row is locked with SELECT ... FOR UPDATE when
    it exists, and a concurrent insert for the same key fails on the unique
    constraint so ``get_or_create`` falls back to reading the winning row.
    """
    key = identity_key_for(answer)
    defaults = {
        "transaction_id": answer.transaction_id,
        "order_reference": answer.order_id,
        "status": answer.order_status or "",
        "amount": answer.amount_or_zero,
        "currency": settings.PAYMENTS_CURRENCY,
        "customer_email": answer.customer_email,
        "raw_answer": answer.raw,
    }

    try:
        if key is None:
            logger.warning("Payment answer without transaction id or order reference, inserting unconditionally")
            return Payment.objects.create(identity_key=None, **defaults)

        with transaction.atomic():
            payment, created = Payment.objects.select_for_update().get_or_create(
                identity_key=key,
                defaults=defaults,
            )
            if not created:
                _merge_into(payment, answer)
                payment.save(
                    update_fields=[
                        "status",
                        "amount",
                        "raw_answer",
                        "transaction_id",
                        "order_reference",
                        "customer_email",
                        "updated_at",
                    ]
                )
    except DatabaseError as exc:
        logger.exception("Could not store payment %s", key)
        raise PaymentStorageError("Error saving payment") from exc

    logger.info("Payment %s %s (status=%s amount=%s)", key, "created" if created else "updated", payment.status, payment.amount)
    return payment
