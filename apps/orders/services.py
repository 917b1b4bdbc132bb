from __future__ import annotations

from django.utils import timezone

from .models import Order


def find_by_reference(reference: str) -> Order | None:
    return Order.objects.filter(reference=reference).first()


def confirm_order(reference: str, payment=None) -> bool:
    """
    Promote the pending order with ``reference`` to confirmed.

    The transition is a single conditional UPDATE, so concurrent or repeated
    notifications confirm an order at most once. Returns True only for the
    call that performed the transition.
    """
    updated = Order.objects.filter(reference=reference, status=Order.STATUS_PENDING).update(
        status=Order.STATUS_CONFIRMED,
        payment=payment,
        confirmed_at=timezone.now(),
        updated_at=timezone.now(),
    )
    return updated == 1
