"""Hash configuration and option resolution."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr

from pwtoken.exceptions import ValidationError

MIN_ITERATIONS = 1
MIN_SALT_SIZE = 16
MIN_HASH_SIZE = 32


class HashConfig(BaseModel):
    """Parameters for one PBKDF2 derivation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    iterations: StrictInt = 612484
    hash_size: StrictInt = 32
    salt_size: StrictInt = 16
    digest: StrictStr = "sha512"


DEFAULT_CONFIG = HashConfig()


def check_floors(iterations: int, salt_size: int, hash_size: int) -> str | None:
    """Return the message for the first violated floor, or ``None``."""
    if iterations < MIN_ITERATIONS:
        return f"iterations must be >= {MIN_ITERATIONS}"
    if salt_size < MIN_SALT_SIZE:
        return f"minimum salt size is {MIN_SALT_SIZE} bytes"
    if hash_size < MIN_HASH_SIZE:
        return f"minimum hash size is {MIN_HASH_SIZE} bytes"
    return None


def resolve_config(
    overrides: Mapping[str, Any] | HashConfig | None = None,
    **options: Any,
) -> HashConfig:
    """Merge *overrides* and *options* over :data:`DEFAULT_CONFIG`.

    Keyword *options* win over *overrides*; ``None`` values are treated as
    absent. Raises :class:`ValidationError` for unknown keys, wrong types or
    a violated floor.

    >>> resolve_config(iterations=1000).salt_size
    16
    """
    if isinstance(overrides, HashConfig):
        overrides = overrides.model_dump()

    merged = DEFAULT_CONFIG.model_dump()
    for source in (overrides or {}, options):
        merged.update({k: v for k, v in source.items() if v is not None})

    try:
        config = HashConfig.model_validate(merged)
    except pydantic.ValidationError as exc:
        raise ValidationError(_describe(exc)) from exc

    problem = check_floors(config.iterations, config.salt_size, config.hash_size)
    if problem:
        raise ValidationError(problem)
    return config


def _describe(exc: pydantic.ValidationError) -> str:
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or "config"
    return f"invalid option {field!r}: {first['msg']}"
