from django.contrib import admin

from .models import Order


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("reference", "customer_email", "status", "total_amount", "currency", "confirmed_at")
    search_fields = ("reference", "customer_email", "customer_name")
    list_filter = ("status",)
