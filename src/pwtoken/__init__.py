"""pwtoken — salted PBKDF2 password hashes packed into self-describing tokens."""

from pwtoken.config import DEFAULT_CONFIG, HashConfig, resolve_config
from pwtoken.exceptions import CryptoError, MalformedTokenError, PwTokenError, ValidationError
from pwtoken.hasher import (
    TokenInfo,
    hash_password,
    hash_password_async,
    inspect_token,
    verify_password,
    verify_password_async,
)

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_CONFIG",
    "HashConfig",
    "resolve_config",
    "TokenInfo",
    "hash_password",
    "hash_password_async",
    "verify_password",
    "verify_password_async",
    "inspect_token",
    "PwTokenError",
    "ValidationError",
    "MalformedTokenError",
    "CryptoError",
]
