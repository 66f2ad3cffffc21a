"""User-facing hashing API: hash, verify, inspect, plus async variants."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from pwtoken import codec
from pwtoken.config import HashConfig, resolve_config
from pwtoken.exceptions import MalformedTokenError
from pwtoken.kdf import Password

log = logging.getLogger(__name__)


class TokenInfo(BaseModel):
    """Derivation parameters stored in a token (no salt or hash bytes)."""

    model_config = ConfigDict(frozen=True)

    iterations: int
    hash_size: int
    salt_size: int
    digest: str


def hash_password(
    password: Password,
    overrides: Mapping[str, Any] | HashConfig | None = None,
    **options: Any,
) -> str:
    """Hash *password* and return a self-describing hex token.

    >>> token = hash_password("hunter2", iterations=10)
    >>> verify_password("hunter2", token)
    True
    """
    config = resolve_config(overrides, **options)
    log.debug(
        "Hashing password (iterations=%d, digest=%s, salt=%d, hash=%d)",
        config.iterations,
        config.digest,
        config.salt_size,
        config.hash_size,
    )
    return codec.encode(password, config)


def verify_password(password: Password, token: str) -> bool:
    """Return True if *password* matches *token*."""
    try:
        matched = codec.verify(password, token)
    except MalformedTokenError as exc:
        log.warning("Rejected token: %s", exc.reason)
        raise
    log.debug("Password verification %s", "succeeded" if matched else "failed")
    return matched


def inspect_token(token: str) -> TokenInfo:
    """Describe the parameters a token was produced with."""
    decoded = codec.decode(token)
    return TokenInfo(
        iterations=decoded.iterations,
        hash_size=len(decoded.hash),
        salt_size=len(decoded.salt),
        digest=decoded.digest,
    )


async def hash_password_async(
    password: Password,
    overrides: Mapping[str, Any] | HashConfig | None = None,
    **options: Any,
) -> str:
    """:func:`hash_password` on a worker thread."""
    return await asyncio.to_thread(hash_password, password, overrides, **options)


async def verify_password_async(password: Password, token: str) -> bool:
    """:func:`verify_password` on a worker thread."""
    return await asyncio.to_thread(verify_password, password, token)
