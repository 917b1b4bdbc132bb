from celery import shared_task

from .exceptions import NotificationError
from .services import DEFAULT_SENDER_NAME, DEFAULT_SUBJECT, send_payment_confirmation


@shared_task(
    autoretry_for=(NotificationError,),
    retry_backoff=30,
    retry_jitter=True,
    max_retries=5,
)
def send_payment_confirmation_email(
    recipient: str,
    order_reference: str,
    amount: int,
    subject: str = DEFAULT_SUBJECT,
    sender_name: str = DEFAULT_SENDER_NAME,
) -> None:
    send_payment_confirmation(recipient, order_reference, amount, subject=subject, sender_name=sender_name)
