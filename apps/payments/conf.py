from __future__ import annotations

from dataclasses import dataclass

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

REQUIRED_SETTINGS = (
    "IZIPAY_USERNAME",
    "IZIPAY_PASSWORD",
    "IZIPAY_HMACSHA256",
    "IZIPAY_PUBLIC_KEY",
    "IZIPAY_BASE_URL",
)


@dataclass(frozen=True)
class GatewayConfig:
    username: str
    password: str
    hmac_key: str
    public_key: str
    base_url: str
    capture_secret: str | None
    timeout: float


def get_gateway_config() -> GatewayConfig:
    missing = [name for name in REQUIRED_SETTINGS if not getattr(settings, name, "")]
    if missing:
        raise ImproperlyConfigured(f"Missing payment gateway settings: {', '.join(missing)}")

    return GatewayConfig(
        username=settings.IZIPAY_USERNAME,
        password=settings.IZIPAY_PASSWORD,
        hmac_key=settings.IZIPAY_HMACSHA256,
        public_key=settings.IZIPAY_PUBLIC_KEY,
        base_url=settings.IZIPAY_BASE_URL.rstrip("/"),
        capture_secret=getattr(settings, "IZIPAY_SECRET_KEY", "") or None,
        timeout=getattr(settings, "PAYMENTS_HTTP_TIMEOUT", 15),
    )
