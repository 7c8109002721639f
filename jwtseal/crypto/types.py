"""Type definitions for algorithms, registered names, and key entries."""

from enum import StrEnum
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from jwtseal.crypto.secret import Secret

KeyId = int | str

_HMAC_HASHES = {
    "HS256": ("sha256", 32),
    "HS384": ("sha384", 48),
    "HS512": ("sha512", 64),
}


class Algorithm(StrEnum):
    """Algorithm header parameter values from RFC 7518 section 3.1."""

    NONE = "none"
    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    ES256 = "ES256"
    ES384 = "ES384"
    ES512 = "ES512"
    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"
    PS256 = "PS256"
    PS384 = "PS384"
    PS512 = "PS512"

    @property
    def is_none(self) -> bool:
        return self is Algorithm.NONE

    @property
    def is_implemented(self) -> bool:
        """Whether tokens can be signed and verified with this algorithm."""
        return self.is_none or self.value in _HMAC_HASHES

    @property
    def hash_name(self) -> str | None:
        """hashlib name of the HMAC digest, or None."""
        entry = _HMAC_HASHES.get(self.value)
        return entry[0] if entry else None

    @property
    def digest_size(self) -> int | None:
        """Raw signature length in bytes; None when unimplemented."""
        if self.is_none:
            return 0
        entry = _HMAC_HASHES.get(self.value)
        return entry[1] if entry else None


class RegisteredClaim(StrEnum):
    """Registered claim names from RFC 7519 section 4.1."""

    ISSUER = "iss"
    SUBJECT = "sub"
    AUDIENCE = "aud"
    EXPIRATION_TIME = "exp"
    NOT_BEFORE = "nbf"
    ISSUED_AT = "iat"
    JWT_ID = "jti"


class HeaderParameter(StrEnum):
    """Registered header parameter names from RFC 7515 section 4.1."""

    ALGORITHM = "alg"
    JWK_SET_URL = "jku"
    JSON_WEB_KEY = "jwk"
    KEY_ID = "kid"
    X509_URL = "x5u"
    X509_CERT_CHAIN = "x5c"
    X509_CERT_SHA1_THUMBPRINT = "x5t"
    X509_CERT_SHA256_THUMBPRINT = "x5t#S256"
    TYPE = "typ"


class VerificationState(StrEnum):
    """Whether a token's claims may be read through the verified accessor."""

    UNVERIFIED = "unverified"
    VERIFIED = "verified"


class KeyEntry(NamedTuple):
    """A registered signing key, as resolved from a key source."""

    algorithm: Algorithm
    secret: "Secret"
    key_id: KeyId
