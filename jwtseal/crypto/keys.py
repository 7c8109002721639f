"""Key registration and resolution by key id."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Protocol

from jwtseal.core.errors import KeyNotFoundError
from jwtseal.crypto.secret import Secret
from jwtseal.crypto.types import Algorithm, KeyEntry, KeyId


class KeySource(Protocol):
    """Anything that can resolve a key id to a signing key."""

    def get_key(self, key_id: KeyId | None = None) -> KeyEntry: ...


def _check_key_id(key_id: object) -> KeyId:
    # bool is an int subclass; True would alias key id 1
    if isinstance(key_id, bool) or not isinstance(key_id, int | str):
        raise TypeError(f"Key id must be int or str, not {type(key_id).__name__}")
    return key_id


def _resolve(
    keys: Mapping[KeyId, KeyEntry],
    key_id: KeyId | None,
    default: KeyId | None,
    last: KeyId | None,
) -> KeyEntry:
    """Prefer explicitly requested > explicit default > most recently added."""
    if key_id is None:
        key_id = default if default is not None else last
    if key_id is None or isinstance(key_id, bool) or key_id not in keys:
        raise KeyNotFoundError(key_id)
    return keys[key_id]


class KeyContainer:
    """Mutable key builder.

    Build one at application start, then either share it as-is or call
    `freeze` to get an immutable KeyRegistry for concurrent use.
    """

    def __init__(self) -> None:
        self._keys: dict[KeyId, KeyEntry] = {}
        self._default: KeyId | None = None
        self._last: KeyId | None = None

    def add_key(self, key_id: KeyId, algorithm: Algorithm, secret: Secret) -> "KeyContainer":
        """Register (or replace) the key for `key_id`."""
        key_id = _check_key_id(key_id)
        algorithm = Algorithm(algorithm)
        if not isinstance(secret, Secret):
            raise TypeError("secret must be a Secret")
        self._keys[key_id] = KeyEntry(algorithm, secret, key_id)
        self._last = key_id
        return self

    def set_default_key(self, key_id: KeyId) -> "KeyContainer":
        """Prefer `key_id` when none is requested. Need not exist yet."""
        self._default = _check_key_id(key_id)
        return self

    def get_key(self, key_id: KeyId | None = None) -> KeyEntry:
        return _resolve(self._keys, key_id, self._default, self._last)

    def freeze(self) -> "KeyRegistry":
        """Snapshot the current keys into an immutable registry."""
        return KeyRegistry(dict(self._keys), self._default, self._last)

    def __contains__(self, key_id: object) -> bool:
        return not isinstance(key_id, bool) and key_id in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"KeyContainer(keys={len(self._keys)})"


class KeyRegistry:
    """Immutable key lookup, safe to share across threads."""

    __slots__ = ("_keys", "_default", "_last")

    def __init__(
        self,
        keys: Mapping[KeyId, KeyEntry],
        default: KeyId | None = None,
        last: KeyId | None = None,
    ) -> None:
        self._keys = MappingProxyType(dict(keys))
        self._default = default
        self._last = last

    @property
    def default_key_id(self) -> KeyId | None:
        return self._default

    def get_key(self, key_id: KeyId | None = None) -> KeyEntry:
        return _resolve(self._keys, key_id, self._default, self._last)

    def __contains__(self, key_id: object) -> bool:
        return not isinstance(key_id, bool) and key_id in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"KeyRegistry(keys={len(self._keys)})"
