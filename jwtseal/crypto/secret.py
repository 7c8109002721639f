"""Opaque holder for symmetric key material."""

import secrets

from pydantic import SecretBytes

from jwtseal.crypto.types import Algorithm

MIN_GENERATED_SECRET_BYTES = 32


class Secret:
    """Key material that is only reachable through `reveal`.

    Printing, comparing, copying, or pickling a Secret never exposes the
    underlying bytes. Equality is identity.
    """

    __slots__ = ("_value",)

    def __init__(self, value: str | bytes) -> None:
        if isinstance(value, str):
            value = value.encode("utf-8")
        if not isinstance(value, bytes):
            raise TypeError("Secret value must be str or bytes")
        self._value = SecretBytes(value)

    def reveal(self) -> bytes:
        """Return the raw key bytes."""
        return self._value.get_secret_value()

    def __repr__(self) -> str:
        return "Secret('**********')"

    __str__ = __repr__

    def __copy__(self) -> "Secret":
        return self

    def __deepcopy__(self, _memo: dict) -> "Secret":
        return self

    def __reduce__(self) -> tuple:
        raise TypeError("Secret objects cannot be serialized")


def generate_secret(algorithm: Algorithm) -> Secret:
    """Generate a random secret at least as long as the algorithm's digest."""
    size = max(algorithm.digest_size or 0, MIN_GENERATED_SECRET_BYTES)
    return Secret(secrets.token_bytes(size))
