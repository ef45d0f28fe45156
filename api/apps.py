from django.apps import AppConfig


class ApiConfig(AppConfig):
    """JSON endpoints for staff login, registration and session state."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "api"
