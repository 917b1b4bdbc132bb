from django.contrib import admin

from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("identity_key", "order_reference", "status", "amount", "currency", "updated_at")
    search_fields = ("transaction_id", "order_reference", "customer_email")
    list_filter = ("status", "currency")
    readonly_fields = ("raw_answer", "created_at", "updated_at")
