from __future__ import annotations

import logging

import requests

from .conf import GatewayConfig, get_gateway_config
from .exceptions import GatewayError
from .signature import compact_json, sign_request_body

logger = logging.getLogger(__name__)


class CaptureNotConfigured(GatewayError):
    pass


class IzipayClient:
    """Thin wrapper over the gateway REST API (V4)."""

    def __init__(self, config: GatewayConfig | None = None) -> None:
        self.config = config or get_gateway_config()

    def _post(self, path: str, body: dict, headers: dict | None = None, **kwargs) -> dict:
        url = f"{self.config.base_url}{path}"
        # Sent byte-for-byte as signed.
        request_headers = {"Content-Type": "application/json", **(headers or {})}
        try:
            resp = requests.post(
                url,
                data=compact_json(body).encode("utf-8"),
                headers=request_headers,
                timeout=self.config.timeout,
                **kwargs,
            )
            resp.raise_for_status()
            return resp.json() or {}
        except requests.RequestException as exc:
            logger.warning("Gateway call %s failed: %s", path, exc)
            raise GatewayError(f"Gateway call {path} failed") from exc
        except ValueError as exc:
            raise GatewayError(f"Gateway call {path} returned invalid JSON") from exc

    def create_form_token(self, data: dict) -> dict:
        customer = data["customer"]
        body = {
            # Checkout amounts are in soles; the gateway wants céntimos.
            "amount": int(round(data["amount"] * 100)),
            "currency": data.get("currency") or "PEN",
            "orderId": data["orderId"],
            "customer": {
                "email": customer["email"],
                "billingDetails": {
                    "firstName": customer.get("firstName") or "N/A",
                    "lastName": customer.get("lastName") or "N/A",
                    "phoneNumber": customer.get("phoneNumber", ""),
                    "identityType": customer.get("identityType", ""),
                    "identityCode": customer.get("identityCode", ""),
                    "address": customer.get("address", ""),
                    "country": customer.get("country") or "PE",
                    "city": customer.get("city", ""),
                    "state": customer.get("state", ""),
                    "zipCode": customer.get("zipCode", ""),
                },
            },
            "contextMode": data.get("contextMode") or "LIVE",
        }
        payload = self._post(
            "/V4/Charge/CreatePayment",
            body,
            auth=(self.config.username, self.config.password),
        )
        form_token = (payload.get("answer") or {}).get("formToken")
        if not form_token:
            message = (payload.get("answer") or {}).get("errorMessage") or "No formToken received from gateway"
            raise GatewayError(message)
        return {"formToken": form_token, "publicKey": self.config.public_key}

    def capture_transaction(self, uuid: str) -> dict:
        if not self.config.capture_secret:
            raise CaptureNotConfigured("IZIPAY_SECRET_KEY is not configured")
        body = {"uuid": uuid}
        signature = sign_request_body(body, self.config.capture_secret)
        return self._post(
            "/V4/Charge/Capture",
            body,
            headers={"Authorization": f"V2-HMAC-SHA256, Signature={signature}"},
        )
