"""Key-value store backends.

Two interchangeable implementations of the same small interface:

- `DatabaseStore`: rows of `storage.Entry` (default, shared by every
  request of the process and every process using the database)
- `MemoryStore`: an in-process dict, handy for tests and scripts
"""
from __future__ import annotations

from typing import Iterable, Protocol

from .models import Entry


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...

    def keys(self, prefix: str = "") -> list[str]: ...


class DatabaseStore:
    """Store backed by the `Entry` table.

    Keys come back in insertion order; callers must not rely on it.
    """

    def get(self, key: str) -> str | None:
        return Entry.objects.filter(key=key).values_list("value", flat=True).first()

    def set(self, key: str, value: str) -> None:
        Entry.objects.update_or_create(key=key, defaults={"value": value})

    def delete(self, key: str) -> None:
        Entry.objects.filter(key=key).delete()

    def keys(self, prefix: str = "") -> list[str]:
        qs = Entry.objects.all()
        if prefix:
            qs = qs.filter(key__startswith=prefix)
        # LIKE is case-insensitive on SQLite; the prefix match must not be
        return [k for k in qs.values_list("key", flat=True) if k.startswith(prefix)]


class MemoryStore:
    """In-process dict store. Not shared between processes."""

    def __init__(self, initial: dict[str, str] | Iterable[tuple[str, str]] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self, prefix: str = "") -> list[str]:
        return [k for k in self._data if k.startswith(prefix)]

    def __len__(self) -> int:
        return len(self._data)

