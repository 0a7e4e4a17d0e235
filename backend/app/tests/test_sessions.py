"""
Tests for the in-memory session store and signed session ids.
"""
from app.core.security import (
    get_password_hash, sign_session_id, unsign_session_id, verify_password,
)
from app.core.sessions import Session, SessionStore

SECRET = "k" * 64


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_session_set_creates_and_persists():
    store = SessionStore(expiry_seconds=60)
    session = Session(store)
    assert session.session_id is None

    session.set("user_id", "abc")
    assert session.is_new
    assert store.load(session.session_id) == {"user_id": "abc"}


def test_session_expires_after_inactivity():
    clock = FakeClock()
    store = SessionStore(expiry_seconds=60, clock=clock)
    session_id = store.create()
    store.save(session_id, {"user_id": "abc"})

    clock.now += 59
    assert store.load(session_id) == {"user_id": "abc"}
    # Activity refreshed the session, so another 59 seconds is still fine
    clock.now += 59
    assert store.load(session_id) is not None
    clock.now += 61
    assert store.load(session_id) is None
    assert len(store) == 0


def test_expired_sessions_are_purged_on_create():
    clock = FakeClock()
    store = SessionStore(expiry_seconds=10, clock=clock)
    store.create()
    store.create()
    clock.now += 11
    store.create()
    assert len(store) == 1


def test_session_clear():
    store = SessionStore(expiry_seconds=60)
    session = Session(store)
    session.set("user_id", "abc")
    session_id = session.session_id

    session.clear()
    assert session.get("user_id") is None
    assert session.cleared
    assert store.load(session_id) is None


def test_signed_session_id_round_trip():
    token = sign_session_id("session-123", SECRET)
    assert token != "session-123"
    assert unsign_session_id(token, SECRET) == "session-123"


def test_signed_session_id_rejects_tampering():
    token = sign_session_id("session-123", SECRET)
    assert unsign_session_id(token, "other" * 16) is None
    assert unsign_session_id("not-a-token", SECRET) is None


def test_password_hash_and_verify():
    hashed = get_password_hash("password123")
    assert hashed != "password123"
    assert verify_password("password123", hashed)
    assert not verify_password("password124", hashed)
    assert not verify_password("password123", "not-a-bcrypt-hash")


def test_password_hash_is_salted():
    assert get_password_hash("password123") != get_password_hash("password123")
