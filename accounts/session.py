"""Explicit owner of the "current user" pointer.

`SessionContext` wraps any mutable mapping; in requests that is the
Django session, in tests a plain dict works.
"""
from __future__ import annotations

from typing import MutableMapping

from .conf import portal_setting


class SessionContext:
    def __init__(self, backing: MutableMapping, key: str | None = None) -> None:
        self._backing = backing
        self.key = key or portal_setting("SESSION_KEY")

    @property
    def user_id(self) -> str | None:
        return self._backing.get(self.key)

    @property
    def is_established(self) -> bool:
        return bool(self.user_id)

    def establish(self, user_id: str) -> None:
        if not user_id:
            raise ValueError("Cannot establish a session without a user id.")
        self._backing[self.key] = user_id

    def clear(self) -> None:
        self._backing.pop(self.key, None)

    def __repr__(self) -> str:  # pragma: no cover (debug convenience)
        return f"SessionContext<{self.user_id!r}>"
