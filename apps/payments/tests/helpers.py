import json

from django.conf import settings

from apps.payments.signature import sign_payload

ROUND_TRIP_ANSWER = (
    '{"orderStatus":"PAID","orderDetails":{"orderId":"ORD-1","orderPaidAmount":15000},'
    '"customer":{"email":"a@b.com"},"transactions":[{"uuid":"T-1"}]}'
)


def answer_json(**overrides) -> str:
    answer = json.loads(ROUND_TRIP_ANSWER)
    answer.update(overrides)
    return json.dumps(answer)


def ipn_body(raw_answer: str = ROUND_TRIP_ANSWER, key: str | None = None) -> dict:
    return {"kr-answer": raw_answer, "kr-hash": sign_payload(raw_answer, key or settings.IZIPAY_PASSWORD)}


def callback_body(raw_answer: str = ROUND_TRIP_ANSWER, key: str | None = None) -> dict:
    return {"kr-answer": raw_answer, "kr-hash": sign_payload(raw_answer, key or settings.IZIPAY_HMACSHA256)}


def flip_hex_char(digest: str, index: int = 0) -> str:
    replacement = "0" if digest[index] != "0" else "1"
    return digest[:index] + replacement + digest[index + 1 :]
