from django.apps import AppConfig


class StorageConfig(AppConfig):
    """App configuration for the flat key-value storage namespace."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "storage"
