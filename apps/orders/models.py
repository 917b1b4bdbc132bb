import uuid

from django.db import models


class Order(models.Model):
    """
    Tour booking created at checkout. It stays ``pending`` until the
    payment gateway confirms the charge through an IPN notification.
    """

    STATUS_PENDING = "pending"
    STATUS_CONFIRMED = "confirmed"
    STATUS_CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_CONFIRMED, "Confirmed"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    reference = models.CharField(max_length=100, unique=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    customer_email = models.EmailField()
    customer_name = models.CharField(max_length=255, blank=True)
    items = models.JSONField(default=list, blank=True)
    # Minor currency units (céntimos).
    total_amount = models.PositiveIntegerField(default=0)
    currency = models.CharField(max_length=3, default="PEN")
    payment = models.ForeignKey(
        "payments.Payment",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="orders",
    )
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    confirmed_at = models.DateTimeField(blank=True, null=True)

    def __str__(self) -> str:
        return self.reference
