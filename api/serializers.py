"""Serializers for the staff portal JSON API.

Inputs are bound verbatim (no trimming, blanks allowed) so that the
flows in `accounts.services` decide what counts as missing.
"""
from __future__ import annotations

from rest_framework import serializers


def _verbatim(**kwargs) -> serializers.CharField:
    return serializers.CharField(required=False, default="", allow_blank=True, trim_whitespace=False, **kwargs)


class LoginSerializer(serializers.Serializer):
    username = _verbatim(help_text="Username or e-mail")
    password = _verbatim(write_only=True)


class RegistrationSerializer(serializers.Serializer):
    fullName = _verbatim()
    email = _verbatim()
    username = _verbatim()
    password = _verbatim(write_only=True)


class NotificationSerializer(serializers.Serializer):
    title = serializers.CharField()
    description = serializers.CharField()


class AuthOutcomeSerializer(serializers.Serializer):
    userId = serializers.CharField(source="user_id")
    destination = serializers.CharField()
    redirectUrl = serializers.CharField(source="redirect_url")
    redirectDelayMs = serializers.IntegerField(source="redirect_delay_ms")
    notification = NotificationSerializer()


class SessionSerializer(serializers.Serializer):
    userId = serializers.CharField(allow_null=True)
