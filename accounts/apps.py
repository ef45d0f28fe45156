from django.apps import AppConfig


class AccountsConfig(AppConfig):
    """App configuration for staff accounts (directory, login, registration)."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "accounts"
