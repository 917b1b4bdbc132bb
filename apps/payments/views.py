import logging
from collections.abc import Mapping

from django.http import HttpResponse
from rest_framework import permissions, status, views, viewsets
from rest_framework.response import Response

from apps.notifications.exceptions import NotificationError
from apps.notifications.services import send_payment_confirmation

from .exceptions import AnswerParseError, GatewayError, PaymentStorageError, PaymentVerificationError
from .gateway import CaptureNotConfigured, IzipayClient
from .models import Payment
from .processor import CALLBACK, IPN, CallbackProcessor
from .serializers import ConfirmPaymentSerializer, FormTokenSerializer, PaymentSerializer

logger = logging.getLogger(__name__)


def _signed_fields(data):
    """``(kr-answer, kr-hash)`` from the form or JSON body, or ``(None, None)`` for any other body."""
    if not isinstance(data, Mapping):
        return None, None
    return data.get("kr-answer"), data.get("kr-hash")


class PaymentCallbackView(views.APIView):
    """
    Browser-redirected notification posted after checkout on the hosted
    payment page. Signed with the front HMAC key.
    """

    permission_classes = [permissions.AllowAny]
    authentication_classes: list = []

    def post(self, request, *args, **kwargs):
        processor = CallbackProcessor(CALLBACK)
        try:
            result = processor.process(*_signed_fields(request.data))
        except (PaymentVerificationError, AnswerParseError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except PaymentStorageError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        if result.paid:
            return Response(
                {
                    "valid": True,
                    "status": result.status,
                    "orderId": result.order_id,
                    "message": "Pago válido (front). Procesado.",
                },
                status=status.HTTP_200_OK,
            )
        return Response(
            {
                "valid": True,
                "status": result.status,
                "message": "Pago no completado (front)",
            },
            status=status.HTTP_200_OK,
        )


class PaymentIPNView(views.APIView):
    """
    Server-to-server Instant Payment Notification. Signed with the account
    password. The gateway keeps retrying until it reads
    ``OK! OrderStatus is <status>`` with a 200.
    """

    permission_classes = [permissions.AllowAny]
    authentication_classes: list = []

    def post(self, request, *args, **kwargs):
        processor = CallbackProcessor(IPN)
        try:
            result = processor.process(*_signed_fields(request.data))
        except (PaymentVerificationError, AnswerParseError) as exc:
            return HttpResponse(str(exc), status=status.HTTP_400_BAD_REQUEST, content_type="text/plain")
        except PaymentStorageError as exc:
            return HttpResponse(str(exc), status=status.HTTP_500_INTERNAL_SERVER_ERROR, content_type="text/plain")

        return HttpResponse(
            f"OK! OrderStatus is {result.status}",
            status=status.HTTP_200_OK,
            content_type="text/plain",
        )


class FormTokenView(views.APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = FormTokenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            result = IzipayClient().create_form_token(serializer.validated_data)
        except GatewayError:
            logger.exception("Form token creation failed for order %s", serializer.validated_data["orderId"])
            return Response({"detail": "Could not create the form token."}, status=status.HTTP_502_BAD_GATEWAY)
        return Response(result, status=status.HTTP_200_OK)


class CaptureView(views.APIView):
    permission_classes = [permissions.IsAdminUser]

    def post(self, request, uuid: str, *args, **kwargs):
        try:
            result = IzipayClient().capture_transaction(uuid)
        except CaptureNotConfigured as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
        except GatewayError:
            logger.exception("Capture failed for transaction %s", uuid)
            return Response({"detail": "Could not capture the transaction."}, status=status.HTTP_502_BAD_GATEWAY)
        return Response(result, status=status.HTTP_200_OK)


class ConfirmPaymentView(views.APIView):
    """Resend a payment confirmation email by hand."""

    permission_classes = [permissions.IsAdminUser]

    def post(self, request, *args, **kwargs):
        serializer = ConfirmPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            send_payment_confirmation(data["email"], data["orderId"], data["amount"])
        except NotificationError:
            logger.exception("Manual confirmation for %s failed", data["orderId"])
            return Response(
                {"detail": "Could not send the payment confirmation."},
                status=status.HTTP_502_BAD_GATEWAY,
            )
        return Response({"success": True}, status=status.HTTP_200_OK)


class PaymentViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Payment.objects.order_by("-updated_at")
    serializer_class = PaymentSerializer
    permission_classes = [permissions.IsAdminUser]
    filterset_fields = ["status", "order_reference", "transaction_id", "customer_email"]
    search_fields = ["order_reference", "transaction_id", "customer_email"]
    ordering_fields = ["created_at", "updated_at", "amount"]
