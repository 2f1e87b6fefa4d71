from django.apps import AppConfig


class SociosApiConfig(AppConfig):
    name = "socios_api"
    verbose_name = "Socios API"

    def ready(self):
        from django.conf import settings

        # ─── DI container ───────────────────────────────────────────
        from dues_billing.adapters.config.composition_root import (
            setup_di_container_from_settings,
        )

        setup_di_container_from_settings(settings)
