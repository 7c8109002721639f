"""Compact JWT encoding, decoding, and signature verification."""

import time
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr, ValidationError

from jwtseal.core.errors import (
    InvalidFormatError,
    InvalidSignatureError,
    KeyNotFoundError,
    MalformedClaimsError,
    MalformedHeaderError,
    MissingKeysError,
    TokenExpiredError,
    TokenNotYetValidError,
    UnverifiedAccessError,
)
from jwtseal.core.logging import get_logger
from jwtseal.crypto.algorithms import sign, signatures_match
from jwtseal.crypto.encoding import b64url_encode, decode_segment, encode_segment
from jwtseal.crypto.keys import KeySource
from jwtseal.crypto.secret import Secret
from jwtseal.crypto.types import (
    Algorithm,
    HeaderParameter,
    KeyId,
    RegisteredClaim,
    VerificationState,
)

TOKEN_TYPE = "JWT"

logger = get_logger(__name__)


class ParsedHeader(BaseModel):
    """Shape check for a header decoded from untrusted input."""

    model_config = ConfigDict(extra="allow")

    alg: StrictStr | None = None
    typ: StrictStr | None = None
    kid: StrictInt | StrictStr | None = None


def _now() -> float:
    return time.time()


def _numeric_claim(claims: Mapping[str, Any], name: str) -> float | None:
    value = claims.get(name)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise MalformedClaimsError(f"Claim '{name}' must be a number")
    return value


class Token:
    """A header, claim set, and signature with claim access gated on verification.

    A token built locally trusts its author and starts verified. A token
    decoded with `from_encoded` starts unverified and only becomes verified
    when its signature matches the one recomputed with the registry key
    selected by its `kid`.
    """

    def __init__(self, claims: Mapping[str, Any] | None = None) -> None:
        self._claims: dict[str, Any] = dict(claims or {})
        self._header: dict[str, Any] = {
            HeaderParameter.ALGORITHM.value: None,
            HeaderParameter.TYPE.value: TOKEN_TYPE,
        }
        self._keys: KeySource | None = None
        self._signature: str | None = None
        self._state = VerificationState.VERIFIED

    @property
    def state(self) -> VerificationState:
        return self._state

    @property
    def is_verified(self) -> bool:
        return self._state is VerificationState.VERIFIED

    @property
    def header(self) -> dict[str, Any]:
        """A copy of the header; `alg` reflects the registry once resolved."""
        return dict(self._header)

    @property
    def algorithm(self) -> Algorithm | None:
        alg = self._header.get(HeaderParameter.ALGORITHM.value)
        return alg if isinstance(alg, Algorithm) else None

    def set_keys(self, keys: KeySource) -> "Token":
        self._keys = keys
        return self

    def get_encoded(self, key_id: KeyId | None = None) -> str:
        """Sign and serialize this token with the resolved key.

        Writes the resolved `alg` and `kid` back into the header.
        """
        if self._keys is None:
            raise MissingKeysError("Call set_keys() before encoding a token")
        algorithm, secret, resolved_id = self._keys.get_key(key_id)
        self._header[HeaderParameter.ALGORITHM.value] = algorithm
        self._header[HeaderParameter.KEY_ID.value] = resolved_id
        signing_input = self._signing_input()
        return f"{signing_input}.{self._sign(signing_input, secret)}"

    def get_claims(self) -> dict[str, Any]:
        """Return the claims, provided the signature has been verified."""
        if self._state is VerificationState.VERIFIED:
            return dict(self._claims)
        if self.algorithm is Algorithm.NONE:
            raise UnverifiedAccessError(
                "This token is not signed. Access the claims with "
                "get_unverified_claims() if that is acceptable."
            )
        raise InvalidSignatureError("Signature is invalid")

    def get_unverified_claims(self) -> dict[str, Any]:
        """Return the claims regardless of verification state."""
        return dict(self._claims)

    def get_key_id(self) -> KeyId | None:
        return self._header.get(HeaderParameter.KEY_ID.value)

    @classmethod
    def from_encoded(cls, encoded: str, keys: KeySource) -> "Token":
        """Parse, authenticate, and time-check a compact serialized token.

        A bad signature does not raise here; it makes `get_claims` raise.
        Expiry and not-before are enforced whether or not the signature
        matched.
        """
        parts = encoded.split(".")
        if len(parts) != 3:
            raise InvalidFormatError("Invalid format, wrong number of segments")
        enc_header, enc_claims, signature = parts
        try:
            header = decode_segment(enc_header)
            ParsedHeader.model_validate(header)
        except (InvalidFormatError, ValidationError) as exc:
            raise MalformedHeaderError(f"Invalid header: {exc}") from exc
        try:
            claims = decode_segment(enc_claims)
        except InvalidFormatError as exc:
            raise MalformedClaimsError(f"Invalid claims: {exc}") from exc

        token = cls(claims)
        token._header = header
        token._signature = signature
        token.set_keys(keys)
        token._authenticate()
        token._enforce_time_claims()
        return token

    def _authenticate(self) -> None:
        self._state = VerificationState.UNVERIFIED
        if self._keys is None:
            raise MissingKeysError("Call set_keys() before authenticating a token")
        kid = self.get_key_id()
        try:
            algorithm, secret, _ = self._keys.get_key(kid)
        except KeyNotFoundError:
            logger.debug("token.key_not_found", kid=kid)
            raise
        # The alg header came from the client; only the registry decides
        # which algorithm verifies this token.
        self._header[HeaderParameter.ALGORITHM.value] = algorithm
        if algorithm is Algorithm.NONE:
            return
        expected = self._sign(self._signing_input(), secret)
        if signatures_match(expected, self._signature or ""):
            self._state = VerificationState.VERIFIED
        else:
            logger.debug("token.signature_mismatch", kid=kid, alg=algorithm.value)

    def _enforce_time_claims(self) -> None:
        now = _now()
        exp = _numeric_claim(self._claims, RegisteredClaim.EXPIRATION_TIME.value)
        if exp is not None and now >= exp:
            logger.debug("token.expired", kid=self.get_key_id())
            raise TokenExpiredError("JWT has expired")
        nbf = _numeric_claim(self._claims, RegisteredClaim.NOT_BEFORE.value)
        if nbf is not None and now < nbf:
            logger.debug("token.not_yet_valid", kid=self.get_key_id())
            raise TokenNotYetValidError("JWT is not yet valid")

    def _signing_input(self) -> str:
        return f"{encode_segment(self._header)}.{encode_segment(self._claims)}"

    def _sign(self, signing_input: str, secret: Secret) -> str:
        algorithm = self.algorithm
        if algorithm is None:
            raise MissingKeysError("No algorithm has been resolved for this token")
        return b64url_encode(sign(algorithm, signing_input.encode("ascii"), secret))

    def __repr__(self) -> str:
        alg = self.algorithm
        return (
            f"Token(alg={alg.value if alg else None}, "
            f"kid={self.get_key_id()!r}, state={self._state.value})"
        )
