"""Base64url and JSON segment codecs for the compact serialization."""

import base64
import binascii
import json
import re
from collections.abc import Mapping
from typing import Any

from jwtseal.core.errors import EncodingError, InvalidFormatError

_B64URL_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant {name}")


def b64url_encode(data: bytes) -> str:
    """Encode bytes as unpadded base64url."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(segment: str) -> bytes:
    """Strictly decode unpadded base64url.

    Padding and characters outside the URL-safe alphabet are rejected.
    """
    if not _B64URL_ALPHABET.fullmatch(segment):
        raise InvalidFormatError("Segment is not valid base64url")
    if len(segment) % 4 == 1:
        raise InvalidFormatError("Segment has an impossible base64url length")
    padded = segment + "=" * (-len(segment) % 4)
    try:
        return base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError) as exc:
        raise InvalidFormatError("Segment is not valid base64url") from exc


def json_encode(data: Mapping[str, Any]) -> bytes:
    """Serialize a header or claim set to compact JSON."""
    try:
        text = json.dumps(
            data,
            separators=(",", ":"),
            ensure_ascii=True,
            allow_nan=False,
        )
    except (TypeError, ValueError) as exc:
        raise EncodingError("JSON encoding failed") from exc
    return text.encode("utf-8")


def encode_segment(data: Mapping[str, Any]) -> str:
    """JSON-serialize and base64url-encode a header or claim set."""
    return b64url_encode(json_encode(data))


def decode_segment(segment: str) -> dict[str, Any]:
    """Decode a base64url JSON object segment.

    Raises InvalidFormatError for bad base64, bad JSON, or a non-object value.
    """
    raw = b64url_decode(segment)
    try:
        decoded = json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise InvalidFormatError("JSON was invalid") from exc
    if not isinstance(decoded, dict):
        raise InvalidFormatError("Encoded JSON was not an object")
    return decoded
