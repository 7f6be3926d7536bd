"""
tests.test_credentials

Credential store lookups.
"""

from __future__ import annotations

from authcore.auth.credentials import CredentialStore
from authcore.auth.models import Principal


def test_from_settings_loads_principals(settings) -> None:
    creds = CredentialStore.from_settings(settings)

    assert len(creds) == 3
    alice = creds.find("ALICE", "pw1")
    assert alice is not None
    assert alice.username == "alice"
    assert alice.roles == frozenset({"admin"})


def test_secret_is_case_sensitive(settings) -> None:
    creds = CredentialStore.from_settings(settings)
    assert creds.find("bob", "secret") is not None
    assert creds.find("bob", "Secret") is None
    assert creds.find("bob", "") is None


def test_get_ignores_secret_and_case(settings) -> None:
    creds = CredentialStore.from_settings(settings)
    assert creds.get("Carol") is not None
    assert creds.get("nobody") is None


def test_first_duplicate_wins() -> None:
    creds = CredentialStore(
        [
            Principal("Eve", "first", frozenset({"a"})),
            Principal("eve", "second", frozenset({"b"})),
        ]
    )
    assert len(creds) == 1
    assert creds.find("eve", "first") is not None
    assert creds.find("eve", "second") is None


def test_secret_not_in_repr() -> None:
    assert "hunter2" not in repr(Principal("frank", "hunter2"))


def test_unknown_username_still_compares_a_secret(settings, monkeypatch) -> None:
    calls: list[tuple[bytes, bytes]] = []

    def recording_compare(a: bytes, b: bytes) -> bool:
        calls.append((a, b))
        return False

    monkeypatch.setattr("authcore.auth.credentials.hmac.compare_digest", recording_compare)
    creds = CredentialStore.from_settings(settings)

    assert creds.find("nobody", "pw1") is None
    assert creds.find("alice", "wrong") is None
    assert len(calls) == 2
    assert calls[0][1] == b"pw1"
