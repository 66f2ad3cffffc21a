"""Tests for the public hashing API (sync and async)."""

import asyncio
import logging
import re

import pytest

import pwtoken
from pwtoken import (
    CryptoError,
    MalformedTokenError,
    TokenInfo,
    ValidationError,
    hash_password,
    hash_password_async,
    inspect_token,
    verify_password,
    verify_password_async,
)

FAST = {"iterations": 10, "hash_size": 32, "salt_size": 16}


class TestHashPassword:
    def test_returns_hex(self):
        token = hash_password("password", FAST)
        assert re.fullmatch(r"[0-9a-z]+", token, re.IGNORECASE)
        assert len(token) == 140

    def test_different_hashes(self):
        assert hash_password("same", FAST) != hash_password("same", FAST)

    def test_accepts_bytes(self):
        token = hash_password(b"password", FAST)
        assert verify_password("password", token)

    def test_keyword_options(self):
        info = inspect_token(hash_password("pw", iterations=12, hash_size=48, salt_size=20))
        assert info == TokenInfo(iterations=12, hash_size=48, salt_size=20, digest="sha512")

    @pytest.mark.parametrize(
        "overrides",
        [{"iterations": 0}, {"salt_size": 15}, {"hash_size": 31}],
    )
    def test_floors(self, overrides):
        with pytest.raises(ValidationError):
            hash_password("password", overrides)

    def test_unsupported_digest(self):
        with pytest.raises(CryptoError):
            hash_password("password", FAST, digest="no-such-digest")

    def test_bad_password_type(self):
        with pytest.raises(TypeError):
            hash_password(None, FAST)  # type: ignore[arg-type]


class TestVerifyPassword:
    def test_match(self):
        token = hash_password("password", FAST)
        assert verify_password("password", token) is True

    def test_no_match(self):
        token = hash_password("password", FAST)
        assert verify_password("invalid", token) is False

    def test_unicode_password(self):
        token = hash_password("pässwörd 🔑", FAST)
        assert verify_password("pässwörd 🔑", token)
        assert not verify_password("passwörd 🔑", token)

    def test_empty_password(self):
        token = hash_password("", FAST)
        assert verify_password("", token)
        assert not verify_password(" ", token)

    def test_malformed(self):
        with pytest.raises(MalformedTokenError):
            verify_password("password", "00")

    @pytest.mark.parametrize("digest", ["sha256", "sha512"])
    def test_cross_digest(self, digest):
        token = hash_password("password", FAST, digest=digest)
        assert inspect_token(token).digest == digest
        assert verify_password("password", token)
        assert not verify_password("other", token)

    def test_rejection_is_logged(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING, logger="pwtoken"):
            with pytest.raises(MalformedTokenError):
                verify_password("password", "00")
        assert "Rejected token" in caplog.text

    def test_password_never_logged(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.DEBUG, logger="pwtoken"):
            token = hash_password("sup3r-secret", FAST)
            verify_password("sup3r-secret", token)
        assert "sup3r-secret" not in caplog.text
        assert "iterations=10" in caplog.text


class TestInspectToken:
    def test_defaults(self):
        cfg = pwtoken.resolve_config(iterations=10)
        info = inspect_token(hash_password("pw", cfg))
        assert info.iterations == 10
        assert info.hash_size == 32
        assert info.salt_size == 16
        assert info.digest == "sha512"

    def test_malformed(self):
        with pytest.raises(MalformedTokenError):
            inspect_token("not hex")


class TestAsync:
    def test_round_trip(self):
        async def run():
            token = await hash_password_async("password", FAST)
            return await verify_password_async("password", token), await verify_password_async(
                "invalid", token
            )

        assert asyncio.run(run()) == (True, False)

    def test_concurrent_calls_get_distinct_salts(self):
        async def run():
            return await asyncio.gather(*(hash_password_async("same", FAST) for _ in range(8)))

        tokens = asyncio.run(run())
        assert len(set(tokens)) == 8

    def test_validation_error_surfaces_on_await(self):
        coro = hash_password_async("password", {"iterations": 0})
        with pytest.raises(ValidationError):
            asyncio.run(coro)

    def test_malformed_surfaces_on_await(self):
        coro = verify_password_async("password", "00")
        with pytest.raises(MalformedTokenError):
            asyncio.run(coro)
