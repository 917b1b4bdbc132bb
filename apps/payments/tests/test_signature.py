import base64
import hashlib
import hmac
from unittest import mock

from django.test import SimpleTestCase

from apps.payments.signature import compact_json, sign_payload, sign_request_body, verify_signature

from .helpers import ROUND_TRIP_ANSWER, flip_hex_char

KEY = "secret-key"


class VerifySignatureTests(SimpleTestCase):
    def test_accepts_own_digest(self):
        digest = sign_payload(ROUND_TRIP_ANSWER, KEY)
        self.assertTrue(verify_signature(ROUND_TRIP_ANSWER, digest, KEY))

    def test_accepts_uppercase_hex(self):
        digest = sign_payload(ROUND_TRIP_ANSWER, KEY).upper()
        self.assertTrue(verify_signature(ROUND_TRIP_ANSWER, digest, KEY))

    def test_matches_reference_hmac(self):
        expected = hmac.new(KEY.encode(), ROUND_TRIP_ANSWER.encode(), hashlib.sha256).hexdigest()
        self.assertEqual(sign_payload(ROUND_TRIP_ANSWER, KEY), expected)

    def test_rejects_mutated_payload(self):
        digest = sign_payload(ROUND_TRIP_ANSWER, KEY)
        mutated = ROUND_TRIP_ANSWER.replace("15000", "15001")
        self.assertFalse(verify_signature(mutated, digest, KEY))

    def test_rejects_reserialized_payload(self):
        digest = sign_payload(ROUND_TRIP_ANSWER, KEY)
        reserialized = ROUND_TRIP_ANSWER.replace(",", ", ")
        self.assertFalse(verify_signature(reserialized, digest, KEY))

    def test_rejects_every_single_char_digest_mutation(self):
        digest = sign_payload(ROUND_TRIP_ANSWER, KEY)
        for index in range(len(digest)):
            with self.subTest(index=index):
                self.assertFalse(verify_signature(ROUND_TRIP_ANSWER, flip_hex_char(digest, index), KEY))

    def test_rejects_other_key(self):
        digest = sign_payload(ROUND_TRIP_ANSWER, KEY)
        self.assertFalse(verify_signature(ROUND_TRIP_ANSWER, digest, "another-key"))

    def test_malformed_input_returns_false(self):
        digest = sign_payload(ROUND_TRIP_ANSWER, KEY)
        cases = [
            (ROUND_TRIP_ANSWER, digest[:-2], KEY),
            (ROUND_TRIP_ANSWER, digest[:-1], KEY),
            (ROUND_TRIP_ANSWER, "zz" + digest[2:], KEY),
            (ROUND_TRIP_ANSWER, "", KEY),
            (ROUND_TRIP_ANSWER, digest, ""),
            (None, digest, KEY),
            (ROUND_TRIP_ANSWER, None, KEY),
            (ROUND_TRIP_ANSWER, ["not", "a", "digest"], KEY),
            ("\ud800", digest, KEY),
        ]
        for payload, provided, key in cases:
            with self.subTest(provided=provided, key=key):
                self.assertFalse(verify_signature(payload, provided, key))

    def test_uses_constant_time_comparison(self):
        digest = sign_payload(ROUND_TRIP_ANSWER, KEY)
        with mock.patch("apps.payments.signature.hmac.compare_digest", wraps=hmac.compare_digest) as compare:
            self.assertTrue(verify_signature(ROUND_TRIP_ANSWER, digest, KEY))
        compare.assert_called_once()


class SignRequestBodyTests(SimpleTestCase):
    def test_signs_compact_json_as_base64(self):
        body = {"uuid": "abc123"}
        self.assertEqual(compact_json(body), '{"uuid":"abc123"}')
        expected = base64.b64encode(
            hmac.new(b"capture", b'{"uuid":"abc123"}', hashlib.sha256).digest()
        ).decode()
        self.assertEqual(sign_request_body(body, "capture"), expected)
