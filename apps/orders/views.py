from rest_framework import permissions, viewsets

from .models import Order
from .serializers import OrderSerializer


class OrderViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Order.objects.select_related("payment").order_by("-created_at")
    serializer_class = OrderSerializer
    permission_classes = [permissions.IsAdminUser]
    filterset_fields = ["status", "customer_email"]
    search_fields = ["reference", "customer_email", "customer_name"]
    ordering_fields = ["created_at", "total_amount"]
