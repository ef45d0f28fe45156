from __future__ import annotations

import json
import logging
import re

from accounts import directory
from storage.backends import MemoryStore


def _store(**records) -> MemoryStore:
    return MemoryStore({f"userProfile_{uid}": json.dumps(rec) for uid, rec in records.items()})


def test_lookup_matches_username_or_email_exactly():
    store = _store(u1={"username": "alice", "email": "alice@x.com"})
    by_name = directory.lookup(store, "alice")
    by_mail = directory.lookup(store, "alice@x.com")
    assert by_name.exists and by_name.user_id == "u1"
    assert by_mail.exists and by_mail.user_id == "u1"
    # Case-sensitive, no trimming
    assert not directory.lookup(store, "Alice").exists
    assert not directory.lookup(store, " alice").exists


def test_lookup_without_match_returns_empty_result():
    result = directory.lookup(_store(u1={"username": "alice"}), "bob")
    assert result.exists is False
    assert result.user_id is None
    assert result.profile is None


def test_lookup_ignores_keys_outside_the_profile_namespace():
    store = MemoryStore({"currentUserId": "u1", "settings_alice": json.dumps({"username": "alice"})})
    assert not directory.lookup(store, "alice").exists


def test_corrupt_records_are_skipped_logged_and_reported(caplog):
    store = MemoryStore({
        "userProfile_bad": "{not json",
        "userProfile_list": "[1, 2]",
        "userProfile_ok": json.dumps({"username": "carol"}),
    })
    with caplog.at_level(logging.WARNING, logger="accounts.directory"):
        result = directory.lookup(store, "carol")
    assert result.user_id == "ok"
    assert result.corrupt_keys == ["userProfile_bad", "userProfile_list"]
    assert "userProfile_bad" in caplog.text

    scanned = directory.scan(store)
    assert [p.user_id for p in scanned.profiles] == ["ok"]
    assert scanned.corrupt_keys == ["userProfile_bad", "userProfile_list"]


def test_empty_stored_value_reads_as_empty_profile():
    store = MemoryStore({"userProfile_blank": ""})
    scanned = directory.scan(store)
    assert scanned.corrupt_keys == []
    assert scanned.profiles[0].username == ""
    # An empty profile must not match an empty query
    assert not directory.lookup(store, "").exists


def test_lookup_is_idempotent():
    store = _store(u1={"username": "alice"}, u2={"username": "bob"})
    first = directory.lookup(store, "bob")
    second = directory.lookup(store, "bob")
    assert first == second


def test_first_match_in_store_order_wins():
    store = _store(u1={"username": "dup"}, u2={"email": "dup"})
    assert directory.lookup(store, "dup").user_id == "u1"


def test_profile_completeness_requires_saved_name_and_department():
    full = directory.Profile.from_record("u", {"isSaved": True, "fullName": "A", "department": "CS"})
    assert full.is_complete
    assert not directory.Profile.from_record("u", {"isSaved": True, "fullName": "A"}).is_complete
    assert not directory.Profile.from_record("u", {"isSaved": False, "fullName": "A", "department": "CS"}).is_complete
    # Records written with a plain `saved` flag are understood too
    assert directory.Profile.from_record("u", {"saved": True, "fullName": "A", "department": "CS"}).is_complete


def test_unknown_fields_survive_a_round_trip():
    profile = directory.Profile.from_record("u9", {"username": "z", "phone": "123"})
    assert profile.extra == {"phone": "123"}
    assert profile.to_record()["phone"] == "123"


def test_create_profile_writes_new_incomplete_record():
    store = MemoryStore()
    profile = directory.create_profile(store, full_name="Dan", email="d@x.com", username="dan", password="pw ")
    assert re.fullmatch(r"user_\d{13}_[0-9a-z]{9}", profile.user_id)

    stored = json.loads(store.get(f"userProfile_{profile.user_id}"))
    assert stored["userId"] == profile.user_id
    assert stored["isSaved"] is False
    assert stored["isNewUser"] is True
    assert stored["password"] == "pw "
    assert "department" not in stored
    assert re.fullmatch(r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d{3}Z", stored["createdAt"])


def test_new_user_ids_differ():
    assert directory.new_user_id() != directory.new_user_id()
