"""Integration test: issuing, rotating keys, and reading sessions across threads."""

import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from jwtseal.core.app import create_codec, create_session_handler
from jwtseal.core.errors import KeyNotFoundError
from jwtseal.core.settings import JWTSettings

OLD_KEY = {"id": "2023-12", "alg": "HS256", "secret": "old-secret-value"}
NEW_KEY = {"id": "2024-01", "alg": "HS512", "secret": "new-secret-value"}


@pytest.fixture(autouse=True)
def _flow_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_KEYS", json.dumps([OLD_KEY]))
    monkeypatch.setenv("JWT_SESSION_LIFETIME", "3600")


def test_tokens_survive_key_rotation(monkeypatch: pytest.MonkeyPatch) -> None:
    old_codec = create_codec()
    issued = old_codec.encode({"sub": "user-1"})

    # Rotate: new key is added last and becomes the signing key.
    monkeypatch.setenv("JWT_KEYS", json.dumps([OLD_KEY, NEW_KEY]))
    codec = create_codec()

    decoded = codec.decode(issued)
    assert decoded.get_key_id() == "2023-12"
    assert decoded.get_claims() == {"sub": "user-1"}

    fresh = codec.decode(codec.encode({"sub": "user-2"}))
    assert fresh.get_key_id() == "2024-01"

    # Retire the old key: its tokens are no longer accepted.
    monkeypatch.setenv("JWT_KEYS", json.dumps([NEW_KEY]))
    with pytest.raises(KeyNotFoundError):
        create_codec().decode(issued)


def test_pinned_default_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_KEYS", json.dumps([OLD_KEY, NEW_KEY]))
    monkeypatch.setenv("JWT_DEFAULT_KEY_ID", OLD_KEY["id"])
    codec = create_codec()
    assert codec.decode(codec.encode({"a": 1})).get_key_id() == OLD_KEY["id"]


def test_sessions_shared_across_threads() -> None:
    handler = create_session_handler(JWTSettings())
    encoded = {sid: handler.write(sid, f"data-{sid}") for sid in map(str, range(32))}

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = dict(zip(encoded, pool.map(handler.read, encoded.values())))

    assert results == {sid: f"data-{sid}" for sid in encoded}
