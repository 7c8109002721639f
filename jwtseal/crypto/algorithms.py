"""Signature computation and comparison for the supported algorithms."""

import hmac
import secrets

from jwtseal.core.errors import UnsupportedAlgorithmError
from jwtseal.crypto.secret import Secret
from jwtseal.crypto.types import Algorithm


def sign(algorithm: Algorithm, payload: bytes, secret: Secret) -> bytes:
    """Compute the raw signature of `payload` under `algorithm`."""
    if algorithm is Algorithm.NONE:
        return b""
    hash_name = algorithm.hash_name
    if hash_name is None:
        raise UnsupportedAlgorithmError(f"Unsupported algorithm: {algorithm.value}")
    return hmac.new(secret.reveal(), payload, hash_name).digest()


def signatures_match(expected: str, actual: str) -> bool:
    """Compare encoded signatures in time independent of their contents."""
    return secrets.compare_digest(expected.encode("utf-8"), actual.encode("utf-8"))
