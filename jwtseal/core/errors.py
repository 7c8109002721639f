"""Exception hierarchy for token encoding, decoding, and key lookup."""

from typing import Any


class JWTError(Exception):
    """Base exception for all jwtseal errors."""


class InvalidFormatError(JWTError, ValueError):
    """Raised when an encoded token is structurally malformed."""


class MalformedHeaderError(InvalidFormatError):
    """Raised when the header segment cannot be decoded or validated."""


class MalformedClaimsError(InvalidFormatError):
    """Raised when the claims segment cannot be decoded or validated."""


class KeyNotFoundError(JWTError, LookupError):
    """Raised when no key is registered under the resolved key id."""

    def __init__(self, key_id: Any = None) -> None:
        self.key_id = key_id
        super().__init__(f"No key found with id {key_id!r}")


class UnsupportedAlgorithmError(JWTError):
    """Raised when a known but unimplemented algorithm is selected."""


class InvalidSignatureError(JWTError):
    """Raised when claims are requested from a token that failed verification."""


class UnverifiedAccessError(JWTError):
    """Raised when verified claims are requested from an unsigned token."""


class TokenTimeError(JWTError):
    """Base for temporal claim violations."""


class TokenExpiredError(TokenTimeError):
    """Raised when the current time is on or after the `exp` claim."""


class TokenNotYetValidError(TokenTimeError):
    """Raised when the current time is before the `nbf` claim."""


class EncodingError(JWTError, ValueError):
    """Raised when a header or claim set cannot be serialized."""


class MissingKeysError(JWTError, RuntimeError):
    """Raised when a token is encoded before a key source is attached."""
