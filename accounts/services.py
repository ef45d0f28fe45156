"""Login and registration flows for the staff portal.

Both flows take the key-value store and a `SessionContext` explicitly,
return an `AuthOutcome` describing where to go next and what to tell the
user, and raise a `StaffPortalError` subclass otherwise. Anything that
is not a portal error is logged and re-raised as `UnexpectedPortalError`
so callers only ever have one family of exceptions to render.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from . import directory
from .conf import portal_setting
from .exceptions import (
    MissingFieldsError,
    ProfileConflictError,
    ProfileNotFoundError,
    StaffPortalError,
    UnexpectedPortalError,
)
from .session import SessionContext

logger = logging.getLogger(__name__)


DASHBOARD = "dashboard"
PROFILE_COMPLETION = "profile_completion"

LOGIN_FAILED = "An error occurred during login. Please try again."
REGISTRATION_FAILED = "An error occurred during registration. Please try again."
USERNAME_TAKEN = "Username already exists. Please choose a different username or login instead."
EMAIL_TAKEN = "Email already registered. Please use a different email or login instead."


@dataclass(frozen=True)
class Notification:
    title: str
    description: str


@dataclass(frozen=True)
class AuthOutcome:
    user_id: str
    destination: str
    notification: Notification

    @property
    def redirect_url(self) -> str:
        if self.destination == DASHBOARD:
            return portal_setting("DASHBOARD_URL")
        return portal_setting("PROFILE_COMPLETION_URL")

    @property
    def redirect_delay_ms(self) -> int:
        return int(portal_setting("REDIRECT_DELAY_MS"))


def _require(*values: str) -> None:
    if any(not (v or "").strip() for v in values):
        raise MissingFieldsError()


def login(store, session: SessionContext, username: str, password: str) -> AuthOutcome:
    """Sign in by username or e-mail.

    The session pointer is only set once a profile matched.
    """
    try:
        _require(username, password)
        found = directory.lookup(store, username)
        if not found.exists:
            raise ProfileNotFoundError()
        profile = found.profile
        if portal_setting("VERIFY_PASSWORD") and profile.password != password:
            # Same message as an unknown user so usernames are not disclosed
            raise ProfileNotFoundError()

        session.establish(profile.user_id)
        if profile.is_complete:
            outcome = AuthOutcome(
                user_id=profile.user_id,
                destination=DASHBOARD,
                notification=Notification("Welcome Back! 🎉", f"Hello, {profile.full_name}!"),
            )
        else:
            outcome = AuthOutcome(
                user_id=profile.user_id,
                destination=PROFILE_COMPLETION,
                notification=Notification(
                    "Complete Your Setup! 📝",
                    "Please complete your profile to continue.",
                ),
            )
    except StaffPortalError:
        raise
    except Exception as exc:
        logger.exception("Login failed for %r", username)
        raise UnexpectedPortalError(LOGIN_FAILED) from exc
    logger.info("Staff login %s -> %s", outcome.user_id, outcome.destination)
    return outcome


def register(
    store,
    session: SessionContext,
    full_name: str,
    email: str,
    username: str,
    password: str,
) -> AuthOutcome:
    """Create a new, incomplete profile and sign it in.

    Username and e-mail are both checked against the username *and*
    e-mail of existing records before anything is written.
    """
    try:
        _require(full_name, email, username, password)
        if directory.lookup(store, username).exists:
            raise ProfileConflictError("username", USERNAME_TAKEN)
        if directory.lookup(store, email).exists:
            raise ProfileConflictError("email", EMAIL_TAKEN)

        profile = directory.create_profile(
            store,
            full_name=full_name,
            email=email,
            username=username,
            password=password,
        )
        session.establish(profile.user_id)
    except StaffPortalError:
        raise
    except Exception as exc:
        logger.exception("Registration failed for %r", username)
        raise UnexpectedPortalError(REGISTRATION_FAILED) from exc
    logger.info("Staff registration %s", profile.user_id)
    return AuthOutcome(
        user_id=profile.user_id,
        destination=PROFILE_COMPLETION,
        notification=Notification(
            "Registration Successful! 🎉",
            "Please select your department to continue.",
        ),
    )
