"""Directory of staff profile records kept in the key-value store.

Each profile is a JSON object stored under `<prefix><user id>` (by
default `userProfile_<id>`). The directory scans every such key, parses
what it can and keeps track of entries it could not read, so that a
single corrupt record never breaks a lookup.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import timezone as dt_timezone
from typing import Any, Iterator

from django.utils import timezone
from django.utils.crypto import get_random_string

from .conf import portal_setting

logger = logging.getLogger(__name__)


_KNOWN_KEYS = {
    "userId",
    "fullName",
    "email",
    "username",
    "password",
    "isSaved",
    "saved",
    "isNewUser",
    "department",
    "createdAt",
}


@dataclass
class Profile:
    user_id: str
    full_name: str = ""
    email: str = ""
    username: str = ""
    password: str = ""
    is_saved: bool = False
    is_new_user: bool = False
    department: str = ""
    created_at: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def is_complete(self) -> bool:
        """Saved, named and assigned to a department."""
        return bool(self.is_saved and self.full_name and self.department)

    def matches(self, identifier: str) -> bool:
        # Missing fields are read as "", which must never match an empty query
        if not identifier:
            return False
        return self.username == identifier or self.email == identifier

    @classmethod
    def from_record(cls, user_id: str, data: dict[str, Any]) -> "Profile":
        # `saved` is read as an alias for records written by older clients
        saved = data.get("isSaved", data.get("saved", False))
        return cls(
            user_id=user_id,
            full_name=data.get("fullName") or "",
            email=data.get("email") or "",
            username=data.get("username") or "",
            password=data.get("password") or "",
            is_saved=bool(saved),
            is_new_user=bool(data.get("isNewUser", False)),
            department=data.get("department") or "",
            created_at=data.get("createdAt") or "",
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "userId": self.user_id,
            "fullName": self.full_name,
            "email": self.email,
            "username": self.username,
            "password": self.password,
            "isSaved": self.is_saved,
            "isNewUser": self.is_new_user,
            "createdAt": self.created_at,
        }
        if self.department:
            record["department"] = self.department
        record.update(self.extra)
        return record


@dataclass
class ScanResult:
    profiles: list[Profile] = field(default_factory=list)
    corrupt_keys: list[str] = field(default_factory=list)


@dataclass
class LookupResult:
    profile: Profile | None = None
    corrupt_keys: list[str] = field(default_factory=list)

    @property
    def exists(self) -> bool:
        return self.profile is not None

    @property
    def user_id(self) -> str | None:
        return self.profile.user_id if self.profile else None


def profile_key(user_id: str) -> str:
    return f"{portal_setting('PROFILE_KEY_PREFIX')}{user_id}"


def _parse(key: str, raw: str | None, prefix: str) -> Profile | None:
    """Return a profile, or None when the stored value is unreadable."""
    try:
        data = json.loads(raw or "{}")
    except (TypeError, ValueError) as exc:
        logger.warning("Skipping unreadable profile record %s: %s", key, exc)
        return None
    if not isinstance(data, dict):
        logger.warning("Skipping profile record %s: expected an object, got %s", key, type(data).__name__)
        return None
    return Profile.from_record(key[len(prefix):], data)


def _iter_records(store) -> Iterator[tuple[str, Profile | None]]:
    prefix = portal_setting("PROFILE_KEY_PREFIX")
    for key in store.keys(prefix):
        yield key, _parse(key, store.get(key), prefix)


def scan(store) -> ScanResult:
    """Read every profile record in the store."""
    result = ScanResult()
    for key, profile in _iter_records(store):
        if profile is None:
            result.corrupt_keys.append(key)
        else:
            result.profiles.append(profile)
    return result


def lookup(store, identifier: str) -> LookupResult:
    """Find the first profile whose username or e-mail equals `identifier`.

    Matching is exact and case-sensitive. Corrupt records seen before the
    match are reported in `corrupt_keys`.
    """
    result = LookupResult()
    for key, profile in _iter_records(store):
        if profile is None:
            result.corrupt_keys.append(key)
            continue
        if profile.matches(identifier):
            result.profile = profile
            break
    return result


def new_user_id() -> str:
    """`user_<epoch ms>_<9 base-36 chars>`."""
    millis = int(timezone.now().timestamp() * 1000)
    suffix = get_random_string(9, allowed_chars="0123456789abcdefghijklmnopqrstuvwxyz")
    return f"user_{millis}_{suffix}"


def iso_timestamp() -> str:
    # Millisecond precision with a Z suffix, e.g. 2024-05-01T09:30:00.123Z
    now = timezone.now().astimezone(dt_timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def create_profile(store, *, full_name: str, email: str, username: str, password: str) -> Profile:
    """Write a new, not yet completed profile record and return it.

    Values are stored verbatim; the password is kept as given.
    """
    profile = Profile(
        user_id=new_user_id(),
        full_name=full_name,
        email=email,
        username=username,
        password=password,
        is_saved=False,
        is_new_user=True,
        created_at=iso_timestamp(),
    )
    store.set(profile_key(profile.user_id), json.dumps(profile.to_record()))
    return profile
