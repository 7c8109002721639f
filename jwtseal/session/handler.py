"""Session data storage inside a signed token claim."""

import time

from jwtseal.core.errors import (
    InvalidSignatureError,
    KeyNotFoundError,
    TokenExpiredError,
    UnsupportedAlgorithmError,
    UnverifiedAccessError,
)
from jwtseal.core.logging import get_logger
from jwtseal.crypto.keys import KeySource
from jwtseal.crypto.token import Token
from jwtseal.crypto.types import Algorithm, RegisteredClaim

SESSION_CLAIM = "sd"
MAX_ENCODED_SIZE = 4096

logger = get_logger(__name__)


class SessionHandler:
    """Reads and writes opaque session strings as signed tokens.

    Transport (cookies, headers) is left to the caller: `write` returns the
    encoded token and `read` accepts whatever the client sent back.
    Unsigned keys are refused, since they would let clients edit their own
    session data.
    """

    def __init__(
        self,
        keys: KeySource,
        *,
        claim: str = SESSION_CLAIM,
        max_size: int = MAX_ENCODED_SIZE,
        lifetime: int | None = None,
    ) -> None:
        self._keys = keys
        self._claim = claim
        self._max_size = max_size
        self._lifetime = lifetime

    def read(self, encoded: str | None) -> str:
        """Return the stored session data, or "" when there is no usable session."""
        if not encoded:
            return ""
        try:
            token = Token.from_encoded(encoded, self._keys)
            claims = token.get_claims()
        except (
            KeyNotFoundError,
            InvalidSignatureError,
            UnverifiedAccessError,
            TokenExpiredError,
        ) as exc:
            logger.debug("session.rejected", reason=type(exc).__name__)
            return ""
        data = claims.get(self._claim, "")
        return data if isinstance(data, str) else ""

    def write(self, session_id: str, data: str) -> str:
        """Encode session data into a signed token.

        Raises OverflowError when the token would not fit in `max_size`.
        """
        algorithm = self._keys.get_key().algorithm
        if algorithm is Algorithm.NONE:
            raise UnsupportedAlgorithmError("Session tokens must be signed")
        claims: dict[str, object] = {
            RegisteredClaim.JWT_ID.value: session_id,
            self._claim: data,
        }
        if self._lifetime is not None:
            claims[RegisteredClaim.EXPIRATION_TIME.value] = int(time.time()) + self._lifetime
        encoded = Token(claims).set_keys(self._keys).get_encoded()
        if len(encoded) >= self._max_size:
            raise OverflowError("Too much data in session to store in a token")
        return encoded
