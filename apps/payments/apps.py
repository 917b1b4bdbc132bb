from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.payments"

    def ready(self) -> None:
        from .conf import get_gateway_config

        # Refuse to start without gateway secrets.
        get_gateway_config()
