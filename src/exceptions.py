"""Custom exceptions"""

class InvalidEncodingError(ValueError):
    """Raised when a share token is not valid unpadded base64url text."""

class CorruptInputError(ValueError):
    """Raised when decoded bytes are not a complete, well-formed compressed payload."""
