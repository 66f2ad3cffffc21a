"""PBKDF2 and salt generation (stdlib ``hashlib`` / ``secrets``)."""

from __future__ import annotations

import hashlib
import logging
import secrets

from pwtoken.exceptions import CryptoError

log = logging.getLogger(__name__)

Password = str | bytes | bytearray | memoryview


def password_bytes(password: Password) -> bytes:
    """UTF-8 encode ``str`` passwords; pass bytes-like values through."""
    if isinstance(password, str):
        return password.encode("utf-8")
    if isinstance(password, (bytes, bytearray, memoryview)):
        return bytes(password)
    raise TypeError(f"password must be str or bytes, not {type(password).__name__}")


def random_bytes(size: int) -> bytes:
    """Return *size* bytes from the OS CSPRNG."""
    try:
        return secrets.token_bytes(size)
    except OSError as exc:
        log.warning("Entropy source failed: %s", exc)
        raise CryptoError(f"could not read {size} random bytes") from exc


def digest_supported(name: str) -> bool:
    try:
        hashlib.new(name)
    except (ValueError, TypeError):
        return False
    return True


def derive(
    password: Password,
    salt: bytes,
    iterations: int,
    length: int,
    digest: str,
) -> bytes:
    """Run PBKDF2-HMAC-*digest* and return *length* bytes."""
    try:
        return hashlib.pbkdf2_hmac(
            digest, password_bytes(password), salt, iterations, dklen=length
        )
    except (ValueError, OverflowError) as exc:
        log.warning("PBKDF2 failed (digest=%s, iterations=%d): %s", digest, iterations, exc)
        raise CryptoError(f"key derivation failed: {exc}") from exc
