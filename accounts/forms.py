"""Forms for the staff login and registration tabs.

The forms only bind and render fields; presence checks and uniqueness
live in `accounts.services` so the HTML views and the JSON API report
the same errors. Values are not stripped, so they are stored verbatim.
"""
from __future__ import annotations

from django import forms


def _text(label: str, placeholder: str, widget=forms.TextInput, **attrs) -> forms.CharField:
    return forms.CharField(
        label=label,
        required=False,
        strip=False,
        widget=widget(attrs={"placeholder": placeholder, **attrs}),
    )


class StaffLoginForm(forms.Form):
    username = _text("Username or Email 👤", "Enter your username or email", autocomplete="username")
    password = forms.CharField(
        label="Password 🔑",
        required=False,
        strip=False,
        widget=forms.PasswordInput(attrs={"placeholder": "Enter your password"}),
    )

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("prefix", "login")
        super().__init__(*args, **kwargs)


class StaffRegistrationForm(forms.Form):
    full_name = _text("Full Name 👤 *", "Enter your full name")
    email = _text("Email Address 📧 *", "Enter your email", widget=forms.EmailInput)
    username = _text("Username 🆔 *", "Choose a username")
    password = forms.CharField(
        label="Password 🔐 *",
        required=False,
        strip=False,
        widget=forms.PasswordInput(attrs={"placeholder": "Create a password"}),
    )

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("prefix", "register")
        super().__init__(*args, **kwargs)
