from .base import *  # noqa

DEBUG = True

ENABLE_SWAGGER = True

# Use local memory cache in development to avoid requiring Redis.
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}
