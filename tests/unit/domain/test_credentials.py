from datetime import datetime, timedelta

import pytest

from config import ApplicationConfig
from src.domain.credentials import (
    TEMPORARY_PASSWORD_LENGTH,
    burn_verification_time,
    generate_temporary_password,
    hash_password,
    hash_reset_token,
    issue_reset_token,
    validate_password,
    verify_password,
    verify_password_async,
)
from src.domain.errors import ErrorCode


def test_hash_is_salted_and_verifies():
    first = hash_password("Secret123")
    second = hash_password("Secret123")

    assert first != second
    assert first != "Secret123"
    assert verify_password("Secret123", first)
    assert verify_password("Secret123", second)
    assert not verify_password("secret123", first)


def test_verify_without_stored_hash_is_false():
    assert verify_password("anything", None) is False
    assert verify_password("anything", "") is False


def test_verify_malformed_hash_is_false():
    assert verify_password("anything", "not-a-bcrypt-hash") is False


@pytest.mark.asyncio
async def test_async_verification_matches_sync():
    stored = hash_password("Secret123")
    assert await verify_password_async("Secret123", stored)
    assert not await verify_password_async("wrong", stored)


@pytest.mark.asyncio
async def test_burn_verification_time_returns_none():
    assert await burn_verification_time("whatever") is None


@pytest.mark.parametrize("password", [None, "", "12345"])
def test_short_passwords_rejected(password):
    result = validate_password(password)
    assert result.is_err()
    assert result.error.code == ErrorCode.VALIDATION_FAILED


def test_six_character_password_accepted():
    assert validate_password("123456").is_ok()


def test_reset_token_only_hash_is_derived():
    now = datetime(2024, 1, 1, 12, 0, 0)
    reset = issue_reset_token(now)

    assert reset.token != reset.token_hash
    assert reset.token_hash == hash_reset_token(reset.token)
    assert len(reset.token_hash) == 64
    assert reset.expires_at == now + timedelta(minutes=ApplicationConfig.RESET_TOKEN_TTL_MINUTES)


def test_reset_tokens_are_unique():
    assert issue_reset_token().token != issue_reset_token().token


def test_temporary_password_shape():
    for _ in range(20):
        password = generate_temporary_password()
        assert len(password) == TEMPORARY_PASSWORD_LENGTH
        assert password.isalnum()
        assert any(c.isdigit() for c in password)
        assert any(c.isalpha() for c in password)


@pytest.mark.parametrize("password", ["p" * 73, "é" * 40])
def test_passwords_over_bcrypt_limit_rejected(password):
    result = validate_password(password)
    assert result.is_err()
    assert result.error.code == ErrorCode.VALIDATION_FAILED


def test_password_at_bcrypt_limit_accepted():
    assert validate_password("p" * 72).is_ok()
    assert validate_password("é" * 36).is_ok()


def test_verify_overlong_plaintext_is_false():
    stored = hash_password("Secret123")
    assert verify_password("p" * 100, stored) is False
