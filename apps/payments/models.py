from django.db import models


class Payment(models.Model):
    """
    A verified gateway notification, one row per transaction.

    ``identity_key`` is ``txn:<uuid>`` when the gateway sent a transaction
    id, else ``order:<reference>``. It is NULL when neither was present, in
    which case the row cannot be deduplicated.
    """

    identity_key = models.CharField(max_length=261, unique=True, null=True, blank=True)
    transaction_id = models.CharField(max_length=255, blank=True, null=True, db_index=True)
    order_reference = models.CharField(max_length=255, blank=True, null=True, db_index=True)
    status = models.CharField(max_length=30)
    # Minor currency units (céntimos).
    amount = models.PositiveBigIntegerField(default=0)
    currency = models.CharField(max_length=3, default="PEN")
    customer_email = models.EmailField(blank=True, null=True)
    raw_answer = models.JSONField(default=dict)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.identity_key or f"payment-{self.pk}"
