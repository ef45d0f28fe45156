"""Errors raised by the login and registration flows.

Every error carries the user-facing `message` shown inline on the form
and a short machine `code` used by the JSON API.
"""
from __future__ import annotations


class StaffPortalError(Exception):
    code = "error"
    default_message = "Something went wrong."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingFieldsError(StaffPortalError):
    """A required form field was empty (or whitespace only)."""

    code = "missing_fields"
    default_message = "Please fill in all fields"


class ProfileNotFoundError(StaffPortalError):
    """No profile record matched the login identifier."""

    code = "not_found"
    default_message = "User not found. Please register first or check your username."


class ProfileConflictError(StaffPortalError):
    """Registration hit an existing username or e-mail."""

    code = "conflict"

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class UnexpectedPortalError(StaffPortalError):
    """Any other failure inside a flow; the cause is chained and logged."""

    code = "unexpected"
    default_message = "An error occurred. Please try again."
