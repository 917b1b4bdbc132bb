"""
Parsing of the gateway's ``kr-answer`` payload.

The answer shape varies between integrations (``customer.email`` vs
``client.email``, ``amount`` vs ``orderDetails.orderPaidAmount``), so each
field is resolved once here from an ordered list of candidate paths and the
first value of the expected type wins.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from .exceptions import InvalidAnswerJson, UnexpectedAnswerShape

logger = logging.getLogger(__name__)

PAID = "PAID"

# Bounds of the columns these values are stored in.
MAX_AMOUNT = 2**63 - 1
MAX_ID_LENGTH = 255
MAX_EMAIL_LENGTH = 254

ORDER_ID_PATHS = (("orderDetails", "orderId"), ("orderId",))
AMOUNT_PATHS = (("amount",), ("orderDetails", "orderPaidAmount"))
EMAIL_PATHS = (("customer", "email"), ("client", "email"))
TRANSACTION_ID_PATHS = (("transactions", 0, "uuid"),)


@dataclass(frozen=True)
class PaymentAnswer:
    order_status: Optional[str] = None
    order_id: Optional[str] = None
    paid_amount: Optional[int] = None
    customer_email: Optional[str] = None
    transaction_id: Optional[str] = None
    raw: dict = field(default_factory=dict)

    @property
    def is_paid(self) -> bool:
        return self.order_status == PAID

    @property
    def amount_or_zero(self) -> int:
        return self.paid_amount if self.paid_amount is not None else 0


def _lookup(data: Any, path: tuple) -> Any:
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or len(current) <= step:
                return None
        elif not isinstance(current, dict):
            return None
        else:
            if step not in current:
                return None
        current = current[step]
    return current


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def resolve_first(data: dict, paths: Iterable[tuple], accept=None) -> Any:
    """Return the first value found along ``paths`` that passes ``accept``."""
    for path in paths:
        value = _lookup(data, path)
        if value is None:
            continue
        if accept is not None and not accept(value):
            continue
        return value
    return None


def _is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _is_amount(value: Any) -> bool:
    if not _is_int(value):
        return False
    if not 0 <= value <= MAX_AMOUNT:
        logger.warning("Ignoring out of range amount %s in answer", value)
        return False
    return True


def _short_str(limit: int):
    def accept(value: Any) -> bool:
        if not _is_non_empty_str(value):
            return False
        if len(value) > limit:
            logger.warning("Ignoring answer value longer than %s characters", limit)
            return False
        return True

    return accept


def _has_expected_shape(decoded: Any) -> bool:
    if not isinstance(decoded, dict):
        return False
    return (
        isinstance(decoded.get("orderStatus"), str)
        or isinstance(decoded.get("orderId"), str)
        or isinstance(decoded.get("orderDetails"), dict)
    )


def parse_answer(raw_payload: str) -> PaymentAnswer:
    if not isinstance(raw_payload, str):
        raise InvalidAnswerJson("kr-answer must be a JSON string")
    try:
        decoded = json.loads(raw_payload)
    except ValueError as exc:
        raise InvalidAnswerJson("kr-answer is not valid JSON") from exc

    if not _has_expected_shape(decoded):
        raise UnexpectedAnswerShape("kr-answer does not have the expected structure")

    status = decoded.get("orderStatus")
    return PaymentAnswer(
        order_status=status if isinstance(status, str) else None,
        order_id=resolve_first(decoded, ORDER_ID_PATHS, _short_str(MAX_ID_LENGTH)),
        paid_amount=resolve_first(decoded, AMOUNT_PATHS, _is_amount),
        customer_email=resolve_first(decoded, EMAIL_PATHS, _short_str(MAX_EMAIL_LENGTH)),
        transaction_id=resolve_first(decoded, TRANSACTION_ID_PATHS, _short_str(MAX_ID_LENGTH)),
        raw=decoded,
    )
