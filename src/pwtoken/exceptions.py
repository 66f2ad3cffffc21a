"""pwtoken exceptions."""


class PwTokenError(Exception):
    """Base exception for all pwtoken errors."""


class ValidationError(PwTokenError, ValueError):
    """Raised when a hash configuration violates one of its floors."""


class MalformedTokenError(PwTokenError, ValueError):
    """Raised when a token cannot be decoded into usable parameters."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Malformed token: {reason}")


class CryptoError(PwTokenError):
    """Raised on key derivation or entropy source failures."""
