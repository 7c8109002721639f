"""Shared test fixtures for jwtseal."""

import pytest

from jwtseal.crypto.codec import Codec
from jwtseal.crypto.keys import KeyContainer
from jwtseal.crypto.secret import Secret
from jwtseal.crypto.types import Algorithm

JWT_ENV_VARS = (
    "JWT_KEYS",
    "JWT_DEFAULT_KEY_ID",
    "JWT_SESSION_MAX_SIZE",
    "JWT_SESSION_LIFETIME",
    "JWT_LOG_LEVEL",
    "JWT_LOG_JSON",
)


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host environment variables out of settings-based tests."""
    for name in JWT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def container() -> KeyContainer:
    """Three HMAC keys added in the order a, b, c."""
    return (
        KeyContainer()
        .add_key("a", Algorithm.HS256, Secret("key-a"))
        .add_key("b", Algorithm.HS384, Secret("key-b"))
        .add_key("c", Algorithm.HS512, Secret("key-c"))
    )


@pytest.fixture
def codec(container: KeyContainer) -> Codec:
    """Codec bound to the shared three-key container."""
    return Codec(container)
