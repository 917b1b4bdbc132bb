from django.urls import path
from rest_framework.routers import DefaultRouter

from .views import (
    CaptureView,
    ConfirmPaymentView,
    FormTokenView,
    PaymentCallbackView,
    PaymentIPNView,
    PaymentViewSet,
)

router = DefaultRouter()
router.register("records", PaymentViewSet, basename="payment-record")

urlpatterns = [
    path("callback/", PaymentCallbackView.as_view(), name="payment-callback"),
    path("ipn/", PaymentIPNView.as_view(), name="payment-ipn"),
    path("formtoken/", FormTokenView.as_view(), name="payment-formtoken"),
    path("capture/<str:uuid>/", CaptureView.as_view(), name="payment-capture"),
    path("confirm/", ConfirmPaymentView.as_view(), name="payment-confirm"),
] + router.urls
