"""Accounts views: staff login/registration page, back link and logout."""
from __future__ import annotations

from django.contrib import messages
from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_POST

from . import services
from .conf import get_store, portal_setting
from .exceptions import StaffPortalError
from .forms import StaffLoginForm, StaffRegistrationForm
from .session import SessionContext

TABS = ("login", "register")
INVALID_INPUT = "Please correct the highlighted fields."


def _render_page(
    request: HttpRequest,
    *,
    tab: str = "login",
    login_form: StaffLoginForm | None = None,
    register_form: StaffRegistrationForm | None = None,
    error: str = "",
    status: int = 200,
) -> HttpResponse:
    ctx = {
        "active_tab": tab if tab in TABS else "login",
        "login_form": login_form or StaffLoginForm(),
        "register_form": register_form or StaffRegistrationForm(),
        "error": error,
        "back_url": portal_setting("FIRST_LOGIN_URL"),
    }
    return render(request, "accounts/staff_login.html", ctx, status=status)


def _navigate(request: HttpRequest, outcome: services.AuthOutcome) -> HttpResponse:
    """Queue the notification, then navigate.

    The two effects are independent: the message is stored for whichever
    page renders next, and navigation either redirects at once or shows
    a short interstitial that refreshes to the target.
    """
    note = outcome.notification
    messages.success(request, f"{note.title} {note.description}")

    delay_ms = outcome.redirect_delay_ms
    if delay_ms <= 0:
        return redirect(outcome.redirect_url)
    resp = render(
        request,
        "accounts/redirecting.html",
        {"target": outcome.redirect_url},
    )
    resp["Refresh"] = f"{delay_ms / 1000:g}; url={outcome.redirect_url}"
    return resp


def staff_login(request: HttpRequest) -> HttpResponse:
    """Render the two-tab page; on POST sign in by username or e-mail."""
    if request.method != "POST":
        return _render_page(request, tab=request.GET.get("tab", "login"))

    form = StaffLoginForm(request.POST)
    if not form.is_valid():
        return _render_page(request, tab="login", login_form=form, error=INVALID_INPUT)
    data = form.cleaned_data
    try:
        outcome = services.login(
            get_store(),
            SessionContext(request.session),
            data.get("username", ""),
            data.get("password", ""),
        )
    except StaffPortalError as exc:
        # Re-render with the typed values except the password
        form = StaffLoginForm(initial={"username": data.get("username", "")})
        return _render_page(request, tab="login", login_form=form, error=exc.message)
    return _navigate(request, outcome)


def staff_register(request: HttpRequest) -> HttpResponse:
    """Create a profile from the Register tab.

    On success the new user is signed in and sent to profile completion.
    """
    if request.method != "POST":
        return _render_page(request, tab="register")

    form = StaffRegistrationForm(request.POST)
    if not form.is_valid():
        return _render_page(request, tab="register", register_form=form, error=INVALID_INPUT)
    data = form.cleaned_data
    try:
        outcome = services.register(
            get_store(),
            SessionContext(request.session),
            data.get("full_name", ""),
            data.get("email", ""),
            data.get("username", ""),
            data.get("password", ""),
        )
    except StaffPortalError as exc:
        form = StaffRegistrationForm(
            initial={k: data.get(k, "") for k in ("full_name", "email", "username")}
        )
        return _render_page(request, tab="register", register_form=form, error=exc.message)
    return _navigate(request, outcome)


@require_GET
def staff_back(request: HttpRequest) -> HttpResponse:
    return redirect(portal_setting("FIRST_LOGIN_URL"))


@require_POST
def staff_logout(request: HttpRequest) -> HttpResponse:
    SessionContext(request.session).clear()
    messages.info(request, "You have been signed out.")
    return redirect("accounts:staff-login")
