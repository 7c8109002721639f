"""Encode and decode tokens against a single key source."""

from collections.abc import Mapping
from typing import Any

from jwtseal.crypto.keys import KeySource
from jwtseal.crypto.token import Token
from jwtseal.crypto.types import KeyId


class Codec:
    """Binds a key source to token encoding and decoding.

    Create one alongside the key container at startup and pass it around
    instead of the container.
    """

    def __init__(self, keys: KeySource) -> None:
        self._keys = keys

    def encode(self, claims: Mapping[str, Any], key_id: KeyId | None = None) -> str:
        """Sign `claims` with `key_id`, or the source's preferred key."""
        return Token(claims).set_keys(self._keys).get_encoded(key_id)

    def decode(self, encoded: str) -> Token:
        """Parse and authenticate an encoded token."""
        return Token.from_encoded(encoded, self._keys)
