"""Storage models: a flat key-value namespace.

Each `Entry` is one key holding an opaque text value. Callers decide the
encoding (profile records are JSON strings) and the key layout (for
example `userProfile_<id>`); nothing here knows about either.
"""
from __future__ import annotations

from django.db import models


class Entry(models.Model):
    key = models.CharField(max_length=255, unique=True)
    value = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]
        verbose_name_plural = "entries"

    def __str__(self) -> str:  # pragma: no cover (string repr convenience)
        return f"Entry<{self.key}>"
