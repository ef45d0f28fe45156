from __future__ import annotations

import json
import logging

import pytest

from accounts import services
from accounts.exceptions import (
    MissingFieldsError,
    ProfileConflictError,
    ProfileNotFoundError,
    UnexpectedPortalError,
)
from accounts.session import SessionContext
from storage.backends import MemoryStore


def _store(**records) -> MemoryStore:
    return MemoryStore({f"userProfile_{uid}": json.dumps(rec) for uid, rec in records.items()})


def _profile_keys(store) -> list[str]:
    return store.keys("userProfile_")


class ExplodingStore(MemoryStore):
    def keys(self, prefix: str = "") -> list[str]:
        raise RuntimeError("storage offline")


# Login


def test_login_complete_profile_goes_to_dashboard():
    store = _store(u1={"username": "alice", "isSaved": True, "fullName": "Alice A", "department": "CS"})
    backing: dict = {}
    outcome = services.login(store, SessionContext(backing), "alice", "pw")
    assert backing["currentUserId"] == "u1"
    assert outcome.user_id == "u1"
    assert outcome.destination == services.DASHBOARD
    assert outcome.redirect_url == "/staff/dashboard"
    assert outcome.notification.title == "Welcome Back! 🎉"
    assert outcome.notification.description == "Hello, Alice A!"


def test_login_incomplete_profile_goes_to_profile_completion():
    store = _store(u2={"username": "bob", "isSaved": False})
    backing: dict = {}
    outcome = services.login(store, SessionContext(backing), "bob", "pw")
    assert backing["currentUserId"] == "u2"
    assert outcome.destination == services.PROFILE_COMPLETION
    assert outcome.redirect_url == "/department-selection"
    assert outcome.notification.title == "Complete Your Setup! 📝"


def test_login_accepts_email_as_identifier():
    store = _store(u3={"username": "erin", "email": "erin@x.com"})
    outcome = services.login(store, SessionContext({}), "erin@x.com", "pw")
    assert outcome.user_id == "u3"


@pytest.mark.parametrize("username,password", [("", "pw"), ("alice", ""), ("   ", "pw"), ("alice", "\t")])
def test_login_requires_both_fields(username, password):
    store = _store(u1={"username": "alice"})
    backing: dict = {}
    with pytest.raises(MissingFieldsError) as exc:
        services.login(store, SessionContext(backing), username, password)
    assert exc.value.message == "Please fill in all fields"
    assert backing == {}


@pytest.mark.parametrize("identifier", ["nobody", "ALICE", "alice@x.com"])
def test_login_unknown_identifier_leaves_session_untouched(identifier):
    store = _store(u1={"username": "alice", "email": "a@x.com"})
    backing = {"currentUserId": "previous"}
    with pytest.raises(ProfileNotFoundError) as exc:
        services.login(store, SessionContext(backing), identifier, "pw")
    assert exc.value.message.startswith("User not found.")
    assert backing == {"currentUserId": "previous"}


def test_login_ignores_password_by_default():
    store = _store(u1={"username": "alice", "password": "secret"})
    assert services.login(store, SessionContext({}), "alice", "anything").user_id == "u1"


def test_login_can_verify_password(settings):
    settings.STAFF_PORTAL = {**settings.STAFF_PORTAL, "VERIFY_PASSWORD": True}
    store = _store(u1={"username": "alice", "password": "secret"})
    backing: dict = {}
    with pytest.raises(ProfileNotFoundError):
        services.login(store, SessionContext(backing), "alice", "wrong")
    assert backing == {}
    assert services.login(store, SessionContext(backing), "alice", "secret").user_id == "u1"


def test_login_skips_corrupt_records():
    store = MemoryStore({
        "userProfile_bad": "{{{",
        "userProfile_u1": json.dumps({"username": "alice"}),
    })
    assert services.login(store, SessionContext({}), "alice", "pw").user_id == "u1"


def test_login_unexpected_failure_is_logged_and_wrapped(caplog):
    backing: dict = {}
    with caplog.at_level(logging.ERROR, logger="accounts.services"):
        with pytest.raises(UnexpectedPortalError) as exc:
            services.login(ExplodingStore(), SessionContext(backing), "alice", "pw")
    assert exc.value.message == services.LOGIN_FAILED
    assert isinstance(exc.value.__cause__, RuntimeError)
    assert "storage offline" in caplog.text
    assert backing == {}


# Registration


def test_register_on_empty_store_creates_incomplete_profile():
    store = MemoryStore()
    backing: dict = {}
    outcome = services.register(store, SessionContext(backing), "Carol", "c@x.com", "carol", "pw")

    keys = _profile_keys(store)
    assert len(keys) == 1
    record = json.loads(store.get(keys[0]))
    assert keys[0] == f"userProfile_{outcome.user_id}"
    assert record["isSaved"] is False
    assert record["isNewUser"] is True
    assert (record["fullName"], record["email"], record["username"], record["password"]) == (
        "Carol",
        "c@x.com",
        "carol",
        "pw",
    )
    assert backing["currentUserId"] == outcome.user_id
    assert outcome.destination == services.PROFILE_COMPLETION
    assert outcome.notification.title == "Registration Successful! 🎉"


def test_registered_user_can_log_in_afterwards():
    store = MemoryStore()
    created = services.register(store, SessionContext({}), "Carol", "c@x.com", "carol", "pw")
    backing: dict = {}
    outcome = services.login(store, SessionContext(backing), "c@x.com", "pw")
    assert outcome.user_id == created.user_id
    assert outcome.destination == services.PROFILE_COMPLETION


def test_register_rejects_taken_username():
    store = _store(u1={"username": "carol", "email": "c1@x.com"})
    backing: dict = {}
    with pytest.raises(ProfileConflictError) as exc:
        services.register(store, SessionContext(backing), "Carol", "new@x.com", "carol", "pw")
    assert exc.value.field == "username"
    assert exc.value.message == services.USERNAME_TAKEN
    assert len(_profile_keys(store)) == 1
    assert backing == {}


def test_register_rejects_taken_email():
    store = _store(u1={"username": "someone", "email": "dup@x.com"})
    with pytest.raises(ProfileConflictError) as exc:
        services.register(store, SessionContext({}), "Dee", "dup@x.com", "dee", "pw")
    assert exc.value.field == "email"
    assert exc.value.message == services.EMAIL_TAKEN
    assert len(_profile_keys(store)) == 1


def test_register_username_equal_to_existing_email_is_a_username_conflict():
    store = _store(u1={"username": "someone", "email": "taken"})
    with pytest.raises(ProfileConflictError) as exc:
        services.register(store, SessionContext({}), "T", "t@x.com", "taken", "pw")
    assert exc.value.field == "username"


@pytest.mark.parametrize("missing", range(4))
def test_register_requires_all_fields(missing):
    values = ["Carol", "c@x.com", "carol", "pw"]
    values[missing] = " "
    store = MemoryStore()
    with pytest.raises(MissingFieldsError):
        services.register(store, SessionContext({}), *values)
    assert len(store) == 0


def test_register_stores_values_verbatim():
    store = MemoryStore()
    outcome = services.register(store, SessionContext({}), " Carol ", "c@x.com", "carol", " pw")
    record = json.loads(store.get(f"userProfile_{outcome.user_id}"))
    assert record["fullName"] == " Carol "
    assert record["password"] == " pw"


def test_register_unexpected_failure_is_wrapped():
    with pytest.raises(UnexpectedPortalError) as exc:
        services.register(ExplodingStore(), SessionContext({}), "C", "c@x.com", "c", "pw")
    assert exc.value.message == services.REGISTRATION_FAILED
