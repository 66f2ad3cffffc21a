"""Binary token layout.

A token is a 16-byte header of four unsigned 32-bit big-endian integers
followed by three variable-length regions::

    offset    size  field
    0         4     salt length   (N1)
    4         4     iterations
    8         4     hash length   (N2)
    12        4     digest length (N3)
    16        N1    salt
    16+N1     N2    derived hash
    16+N1+N2  N3    digest name (UTF-8)

and is exchanged as lowercase hex. The layout carries no version field; a
future layout has to start with a marker that cannot be mistaken for this
header.
"""

from __future__ import annotations

import binascii
import hmac
import struct
from dataclasses import dataclass

from pwtoken.config import HashConfig, check_floors
from pwtoken.exceptions import MalformedTokenError, ValidationError
from pwtoken.kdf import Password, derive, digest_supported, random_bytes

HEADER = struct.Struct(">IIII")
HEADER_SIZE = HEADER.size  # 16
_UINT32_MAX = 0xFFFFFFFF


@dataclass(frozen=True)
class DecodedToken:
    """Parameters and hash recovered from a token."""

    salt: bytes
    iterations: int
    hash: bytes
    digest: str


def _check_header(**fields: int) -> None:
    for name, value in fields.items():
        if not 0 <= value <= _UINT32_MAX:
            raise ValidationError(f"{name} {value} does not fit a 32-bit token field")


def pack(salt: bytes, iterations: int, hash: bytes, digest: str) -> bytes:
    """Serialize the derivation parameters into the binary token layout."""
    digest_bytes = digest.encode("utf-8")
    _check_header(
        salt_length=len(salt),
        iterations=iterations,
        hash_length=len(hash),
        digest_length=len(digest_bytes),
    )
    header = HEADER.pack(len(salt), iterations, len(hash), len(digest_bytes))
    return header + salt + hash + digest_bytes


def unpack(raw: bytes) -> DecodedToken:
    """Parse a binary token, rejecting inconsistent or degenerate ones."""
    if len(raw) < HEADER_SIZE:
        raise MalformedTokenError(f"{len(raw)} bytes is shorter than the {HEADER_SIZE}-byte header")

    salt_len, iterations, hash_len, digest_len = HEADER.unpack_from(raw, 0)
    expected = HEADER_SIZE + salt_len + hash_len + digest_len
    if expected > len(raw):
        raise MalformedTokenError(
            f"declared lengths need {expected} bytes but only {len(raw)} present"
        )
    if expected < len(raw):
        raise MalformedTokenError(f"{len(raw) - expected} unexpected trailing bytes")

    problem = check_floors(iterations, salt_len, hash_len)
    if problem:
        raise MalformedTokenError(problem)

    salt_end = HEADER_SIZE + salt_len
    hash_end = salt_end + hash_len
    salt = raw[HEADER_SIZE:salt_end]
    hash = raw[salt_end:hash_end]
    digest_raw = raw[hash_end:expected]

    if not digest_raw:
        raise MalformedTokenError("empty digest name")
    try:
        digest = digest_raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedTokenError("digest name is not valid UTF-8") from exc
    if not digest_supported(digest):
        raise MalformedTokenError(f"unsupported digest {digest!r}")

    return DecodedToken(salt=salt, iterations=iterations, hash=hash, digest=digest)


def encode(password: Password, config: HashConfig) -> str:
    """Hash *password* under an already resolved *config* and return the hex token."""
    # Header limits are checked before any derivation runs.
    _check_header(
        salt_length=config.salt_size,
        iterations=config.iterations,
        hash_length=config.hash_size,
        digest_length=len(config.digest.encode("utf-8")),
    )
    salt = random_bytes(config.salt_size)
    hash = derive(password, salt, config.iterations, config.hash_size, config.digest)
    return pack(salt, config.iterations, hash, config.digest).hex()


def decode(token: str) -> DecodedToken:
    if not isinstance(token, str):
        raise MalformedTokenError(f"expected a hex string, got {type(token).__name__}")
    try:
        raw = binascii.unhexlify(token)
    except (binascii.Error, ValueError) as exc:
        raise MalformedTokenError("not a valid hex string") from exc
    return unpack(raw)


def verify(password: Password, token: str) -> bool:
    """Re-derive with the token's own parameters and compare in constant time."""
    decoded = decode(token)
    candidate = derive(
        password, decoded.salt, decoded.iterations, len(decoded.hash), decoded.digest
    )
    return hmac.compare_digest(candidate, decoded.hash)
