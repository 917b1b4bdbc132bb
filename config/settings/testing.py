from .base import *  # noqa

DEBUG = True

# Use SQLite for testing to avoid needing a running PostgreSQL instance.
# The test database lives in a file so that threads share it, and writers
# take the lock when their transaction starts instead of on first write.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "test_db.sqlite3",
        "OPTIONS": {
            "transaction_mode": "IMMEDIATE",
            "timeout": 20,
        },
        "TEST": {
            "NAME": BASE_DIR / "test_db_run.sqlite3",
        },
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_THROTTLE_CLASSES": [],
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

IZIPAY_USERNAME = "test-shop"
IZIPAY_PASSWORD = "test-ipn-password"
IZIPAY_HMACSHA256 = "test-front-hmac-key"
IZIPAY_PUBLIC_KEY = "test-shop:testpublickey_abc"
IZIPAY_BASE_URL = "https://api.gateway.test/api-payment"
IZIPAY_SECRET_KEY = "test-capture-secret"

BREVO_API_KEY = "test-brevo-key"
MAIL_FROM = "pagos@example.com"
PAYMENTS_OPERATOR_EMAIL = "operaciones@example.com"
