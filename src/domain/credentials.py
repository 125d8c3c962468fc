"""
Credential Store

Password hashing/verification, password policy, reset tokens and temporary
passwords. Nothing here touches persistence.
"""

import asyncio
import hashlib
import secrets
import string
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

import bcrypt

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.domain.base import utcnow
from src.domain.errors import ErrorCode

MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72
TEMPORARY_PASSWORD_LENGTH = 12

_TEMPORARY_PASSWORD_ALPHABET = string.ascii_letters + string.digits
_dummy_hash: Optional[str] = None


@dataclass(frozen=True)
class ResetToken:
    """A freshly issued reset token. Only token_hash is ever persisted."""

    token: str
    token_hash: str
    expires_at: datetime


def hash_password(plaintext: str) -> str:
    """Bcrypt hash with a per-call salt; cost factor from BCRYPT_ROUNDS."""
    salt = bcrypt.gensalt(ApplicationConfig.BCRYPT_ROUNDS)
    return bcrypt.hashpw(plaintext.encode(), salt).decode()


def verify_password(plaintext: str, password_hash: Optional[str]) -> bool:
    """Constant-time check; False when the account has no password."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(plaintext.encode(), password_hash.encode())
    except ValueError:
        # malformed stored hash
        return False


async def hash_password_async(plaintext: str) -> str:
    return await asyncio.to_thread(hash_password, plaintext)


async def verify_password_async(plaintext: str, password_hash: Optional[str]) -> bool:
    return await asyncio.to_thread(verify_password, plaintext, password_hash)


async def burn_verification_time(plaintext: str) -> None:
    """
    Spend the same time as a real verification.

    Called when the identifier does not match any account so that response
    timing does not reveal which identifiers exist.
    """
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = await hash_password_async("dummy_password")
    await verify_password_async(plaintext, _dummy_hash)


def validate_password(plaintext: Optional[str]) -> Result[None]:
    if plaintext is None or len(plaintext) < MIN_PASSWORD_LENGTH:
        return Return.err(
            Error(
                ErrorCode.VALIDATION_FAILED,
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
            )
        )
    # bcrypt only accepts the first 72 bytes of input
    if len(plaintext.encode()) > MAX_PASSWORD_BYTES:
        return Return.err(
            Error(
                ErrorCode.VALIDATION_FAILED,
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes long",
            )
        )
    return Return.ok(None)


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def issue_reset_token(now: Optional[datetime] = None) -> ResetToken:
    """
    Generate a high-entropy reset token.

    Expiry is now + RESET_TOKEN_TTL_MINUTES; production deployments set a
    shorter window in env.yaml.
    """
    now = now or utcnow()
    token = secrets.token_urlsafe(32)
    return ResetToken(
        token=token,
        token_hash=hash_reset_token(token),
        expires_at=now + timedelta(minutes=ApplicationConfig.RESET_TOKEN_TTL_MINUTES),
    )


def generate_temporary_password(length: int = TEMPORARY_PASSWORD_LENGTH) -> str:
    """Random letters+digits password containing at least one of each."""
    while True:
        password = "".join(
            secrets.choice(_TEMPORARY_PASSWORD_ALPHABET) for _ in range(length)
        )
        if any(c.isdigit() for c in password) and any(c.isalpha() for c in password):
            return password
