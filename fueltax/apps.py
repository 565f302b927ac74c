from django.apps import AppConfig


class FueltaxConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "fueltax"
    verbose_name = "Fuel tax ledger"
