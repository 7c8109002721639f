"""Factories that wire settings, logging, and keys into ready-to-use objects."""

from jwtseal.core.logging import configure_logging
from jwtseal.core.settings import JWTSettings, build_key_container
from jwtseal.crypto.codec import Codec
from jwtseal.session.handler import SessionHandler


def create_codec(settings: JWTSettings | None = None) -> Codec:
    """Build a Codec over a frozen registry of the configured keys."""
    settings = settings or JWTSettings()
    configure_logging(settings.log_level, json=settings.log_json)
    return Codec(build_key_container(settings).freeze())


def create_session_handler(settings: JWTSettings | None = None) -> SessionHandler:
    """Build a SessionHandler over a frozen registry of the configured keys."""
    settings = settings or JWTSettings()
    configure_logging(settings.log_level, json=settings.log_json)
    return SessionHandler(
        build_key_container(settings).freeze(),
        max_size=settings.session_max_size,
        lifetime=settings.session_lifetime,
    )
