"""Unpadded base64url transcoding of compressed payloads"""

import base64
import binascii
import re
from exceptions import InvalidEncodingError

_URL_SAFE_TEXT = re.compile(r"[A-Za-z0-9_-]*")


def to_url_safe_text(data: bytes) -> str:
    """Encode bytes as base64url without '=' padding."""
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def from_url_safe_text(text: str) -> bytes:
    """Decode unpadded base64url text back into bytes.

    Raises InvalidEncodingError for characters outside [A-Za-z0-9_-], for a
    length that cannot come from to_url_safe_text(), and for text whose unused
    trailing bits are not zero.
    """
    if not isinstance(text, str) or not _URL_SAFE_TEXT.fullmatch(text):
        raise InvalidEncodingError("Token contains characters outside the base64url alphabet")
    if len(text) % 4 == 1:
        raise InvalidEncodingError(f"Token length {len(text)} is not a valid base64 grouping")

    # Fix missing base64 padding
    padded = text + "=" * (-len(text) % 4)
    try:
        data = base64.b64decode(padded, altchars=b"-_", validate=True)
    except binascii.Error as e:
        raise InvalidEncodingError(f"Invalid base64url token: {e}") from e

    if to_url_safe_text(data) != text:
        raise InvalidEncodingError("Token is not in canonical base64url form")
    return data
