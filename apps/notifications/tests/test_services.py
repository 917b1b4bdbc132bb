from unittest import mock

import requests
from django.test import SimpleTestCase, override_settings

from apps.notifications.exceptions import NotificationError
from apps.notifications.services import (
    BREVO_SEND_URL,
    build_confirmation_html,
    format_amount,
    send_payment_confirmation,
)
from apps.notifications.tasks import send_payment_confirmation_email


class FormatAmountTests(SimpleTestCase):
    def test_minor_units_to_soles(self):
        self.assertEqual(format_amount(15000), "S/ 150.00")
        self.assertEqual(format_amount(5), "S/ 0.05")
        self.assertEqual(format_amount(0), "S/ 0.00")

    def test_html_escapes_reference(self):
        html = build_confirmation_html("Pago", "<ORD>", 100)
        self.assertIn("&lt;ORD&gt;", html)
        self.assertIn("S/ 1.00", html)


class SendPaymentConfirmationTests(SimpleTestCase):
    @mock.patch("apps.notifications.services.requests.post")
    def test_posts_to_brevo(self, post):
        send_payment_confirmation("a@b.com", "ORD-1", 15000, subject="Pago", sender_name="Ops")

        post.assert_called_once()
        self.assertEqual(post.call_args.args[0], BREVO_SEND_URL)
        body = post.call_args.kwargs["json"]
        self.assertEqual(body["to"], [{"email": "a@b.com"}])
        self.assertEqual(body["sender"], {"email": "pagos@example.com", "name": "Ops"})
        self.assertEqual(body["subject"], "Pago")
        self.assertIn("S/ 150.00", body["htmlContent"])
        self.assertEqual(post.call_args.kwargs["headers"]["api-key"], "test-brevo-key")
        self.assertEqual(post.call_args.kwargs["timeout"], 15)

    @override_settings(BREVO_API_KEY="")
    @mock.patch("apps.notifications.services.requests.post")
    def test_unconfigured_provider(self, post):
        with self.assertRaises(NotificationError):
            send_payment_confirmation("a@b.com", "ORD-1", 100)
        post.assert_not_called()

    @mock.patch("apps.notifications.services.requests.post", side_effect=requests.Timeout("slow"))
    def test_provider_failure(self, post):
        with self.assertRaises(NotificationError):
            send_payment_confirmation("a@b.com", "ORD-1", 100)

    @mock.patch("apps.notifications.services.requests.post")
    def test_provider_error_status(self, post):
        post.return_value.raise_for_status.side_effect = requests.HTTPError("400")
        with self.assertRaises(NotificationError):
            send_payment_confirmation("a@b.com", "ORD-1", 100)


class ConfirmationTaskTests(SimpleTestCase):
    @mock.patch("apps.notifications.tasks.send_payment_confirmation")
    def test_task_delegates_to_service(self, send):
        send_payment_confirmation_email.apply(args=("a@b.com", "ORD-1", 100), kwargs={"subject": "Pago"})
        send.assert_called_once_with("a@b.com", "ORD-1", 100, subject="Pago", sender_name="Peru Travel")
