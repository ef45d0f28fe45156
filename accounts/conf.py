"""Staff portal settings with defaults.

Projects override any of these through a `STAFF_PORTAL` dict in Django
settings; missing keys fall back to `DEFAULTS`.
"""
from __future__ import annotations

from typing import Any

from django.conf import settings
from django.utils.module_loading import import_string


DEFAULTS: dict[str, Any] = {
    "STORE_BACKEND": "storage.backends.DatabaseStore",
    "PROFILE_KEY_PREFIX": "userProfile_",
    "SESSION_KEY": "currentUserId",
    "DASHBOARD_URL": "/staff/dashboard",
    "PROFILE_COMPLETION_URL": "/department-selection",
    "FIRST_LOGIN_URL": "/auth/first-login",
    # Pause between showing the notification and navigating; 0 redirects at once
    "REDIRECT_DELAY_MS": 1000,
    # Off keeps the historical behaviour: login only checks the password is present
    "VERIFY_PASSWORD": False,
}


def portal_setting(name: str) -> Any:
    overrides = getattr(settings, "STAFF_PORTAL", {}) or {}
    if name in overrides:
        return overrides[name]
    try:
        return DEFAULTS[name]
    except KeyError as exc:
        raise AttributeError(f"Unknown staff portal setting: {name}") from exc


def get_store():
    """Instantiate the configured key-value store backend."""
    backend = import_string(portal_setting("STORE_BACKEND"))
    return backend()
