"""
HMAC-SHA256 helpers for gateway notifications and API calls.

The digest is always computed over the exact string received in ``kr-answer``.
Re-serializing the decoded JSON changes the bytes and breaks the signature.
"""
from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json


def sign_payload(raw_payload: str, key: str) -> str:
    return hmac.new(key.encode("utf-8"), raw_payload.encode("utf-8"), hashlib.sha256).hexdigest()


def verify_signature(raw_payload: str, provided_digest_hex: str, key: str) -> bool:
    if not isinstance(raw_payload, str) or not isinstance(provided_digest_hex, str):
        return False
    if not key or not isinstance(key, str):
        return False

    try:
        expected = bytes.fromhex(sign_payload(raw_payload, key))
    except UnicodeEncodeError:
        return False
    try:
        provided = bytes.fromhex(provided_digest_hex.strip())
    except (ValueError, binascii.Error):
        return False
    if len(provided) != len(expected):
        return False
    return hmac.compare_digest(expected, provided)


def compact_json(body: dict) -> str:
    return json.dumps(body, separators=(",", ":"))


def sign_request_body(body: dict, key: str) -> str:
    """Base64 HMAC over the compact JSON body, as the gateway's V2-HMAC-SHA256 header expects."""
    payload = compact_json(body)
    digest = hmac.new(key.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")
