import json
from unittest import mock

import requests
from django.contrib.auth import get_user_model
from django.test import override_settings
from rest_framework.test import APITestCase

from apps.notifications.exceptions import NotificationError
from apps.payments.signature import sign_request_body


def _gateway_response(payload, status_code=200):
    resp = mock.Mock()
    resp.status_code = status_code
    resp.json.return_value = payload
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
    else:
        resp.raise_for_status.return_value = None
    return resp


class FormTokenViewTests(APITestCase):
    url = "/api/payments/formtoken/"
    payload = {
        "amount": "150.00",
        "orderId": "ORD-1",
        "customer": {"email": "a@b.com", "firstName": "Ana"},
    }

    @mock.patch("apps.payments.gateway.requests.post")
    def test_returns_form_token_and_public_key(self, post):
        post.return_value = _gateway_response({"status": "SUCCESS", "answer": {"formToken": "tok-123"}})
        r = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(r.status_code, 200, r.content)
        self.assertEqual(r.data, {"formToken": "tok-123", "publicKey": "test-shop:testpublickey_abc"})

        url = post.call_args.args[0]
        self.assertEqual(url, "https://api.gateway.test/api-payment/V4/Charge/CreatePayment")
        sent = json.loads(post.call_args.kwargs["data"])
        self.assertEqual(sent["amount"], 15000)
        self.assertEqual(sent["currency"], "PEN")
        self.assertEqual(sent["customer"]["billingDetails"]["firstName"], "Ana")
        self.assertEqual(sent["customer"]["billingDetails"]["lastName"], "N/A")
        self.assertEqual(sent["contextMode"], "LIVE")
        self.assertEqual(post.call_args.kwargs["auth"], ("test-shop", "test-ipn-password"))

    @mock.patch("apps.payments.gateway.requests.post")
    def test_gateway_without_token_is_bad_gateway(self, post):
        post.return_value = _gateway_response({"status": "ERROR", "answer": {"errorMessage": "invalid"}})
        r = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(r.status_code, 502)

    @mock.patch("apps.payments.gateway.requests.post")
    def test_gateway_http_error_is_bad_gateway(self, post):
        post.return_value = _gateway_response({}, status_code=401)
        r = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(r.status_code, 502)

    def test_customer_email_is_required(self):
        r = self.client.post(self.url, {"amount": "10.00", "orderId": "ORD-1", "customer": {}}, format="json")
        self.assertEqual(r.status_code, 400)


class StaffEndpointTests(APITestCase):
    def setUp(self):
        self.staff = get_user_model().objects.create_user(username="ops", password="pass12345", is_staff=True)

    def test_capture_requires_staff(self):
        r = self.client.post("/api/payments/capture/abc123/")
        self.assertIn(r.status_code, (401, 403))

    @mock.patch("apps.payments.gateway.requests.post")
    def test_capture_signs_body(self, post):
        post.return_value = _gateway_response({"status": "SUCCESS"})
        self.client.force_authenticate(self.staff)
        r = self.client.post("/api/payments/capture/abc123/")

        self.assertEqual(r.status_code, 200, r.content)
        self.assertEqual(post.call_args.kwargs["data"], b'{"uuid":"abc123"}')
        expected = sign_request_body({"uuid": "abc123"}, "test-capture-secret")
        self.assertEqual(
            post.call_args.kwargs["headers"]["Authorization"],
            f"V2-HMAC-SHA256, Signature={expected}",
        )

    @override_settings(IZIPAY_SECRET_KEY="")
    def test_capture_without_secret_is_unavailable(self):
        self.client.force_authenticate(self.staff)
        r = self.client.post("/api/payments/capture/abc123/")
        self.assertEqual(r.status_code, 503)

    @mock.patch("apps.payments.gateway.requests.post", side_effect=requests.ConnectionError("down"))
    def test_capture_gateway_down(self, post):
        self.client.force_authenticate(self.staff)
        r = self.client.post("/api/payments/capture/abc123/")
        self.assertEqual(r.status_code, 502)

    @mock.patch("apps.payments.views.send_payment_confirmation")
    def test_manual_confirmation(self, send):
        self.client.force_authenticate(self.staff)
        r = self.client.post(
            "/api/payments/confirm/",
            {"email": "a@b.com", "orderId": "ORD-1", "amount": 15000},
            format="json",
        )
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data, {"success": True})
        send.assert_called_once_with("a@b.com", "ORD-1", 15000)

    @mock.patch("apps.payments.views.send_payment_confirmation", side_effect=NotificationError("down"))
    def test_manual_confirmation_failure(self, send):
        self.client.force_authenticate(self.staff)
        r = self.client.post(
            "/api/payments/confirm/",
            {"email": "a@b.com", "orderId": "ORD-1", "amount": 15000},
            format="json",
        )
        self.assertEqual(r.status_code, 502)
