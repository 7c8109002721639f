"""Key and session settings loaded from environment variables."""

from pydantic import BaseModel, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from jwtseal.crypto.keys import KeyContainer
from jwtseal.crypto.secret import Secret
from jwtseal.crypto.types import Algorithm, KeyId

SESSION_MAX_SIZE_DEFAULT = 4096


class KeySpec(BaseModel):
    """One configured signing key."""

    id: KeyId
    alg: Algorithm = Algorithm.HS256
    secret: SecretStr


class JWTSettings(BaseSettings):
    """Signing keys and session options.

    JWT_KEYS holds a JSON list, e.g.
    `[{"id": "2024-01", "alg": "HS256", "secret": "..."}]`.
    """

    model_config = SettingsConfigDict(env_prefix="JWT_")

    keys: list[KeySpec] = []
    default_key_id: KeyId | None = None
    session_max_size: int = SESSION_MAX_SIZE_DEFAULT
    session_lifetime: int | None = None
    log_level: str = "info"
    log_json: bool = False


def build_key_container(settings: JWTSettings) -> KeyContainer:
    """Register every configured key, in order, into a new container."""
    container = KeyContainer()
    for spec in settings.keys:
        container.add_key(spec.id, spec.alg, Secret(spec.secret.get_secret_value()))
    default = settings.default_key_id
    if default is not None:
        # environment values always arrive as strings
        if isinstance(default, str) and default not in container and default.isdigit():
            default = int(default)
        container.set_default_key(default)
    return container
