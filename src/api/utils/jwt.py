from datetime import UTC, datetime, timedelta
import logging
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig
from src.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

# Placeholder values shipped in sample configs; never valid signing keys.
INSECURE_JWT_SECRETS = {
    "",
    "dev-secret-key-change-in-production",
    "your_super_secret_jwt_key_change_this_in_production",
    "change-me",
}


def signing_secret() -> str:
    """
    Return the configured signing secret.

    Raises:
        ConfigurationError: secret is unset or left at a placeholder value
    """
    secret = ApplicationConfig.JWT_SECRET
    if not secret or secret in INSECURE_JWT_SECRETS:
        raise ConfigurationError(
            "JWT_SECRET is not set or is using a default value. "
            "Set a secure JWT_SECRET in env.yaml."
        )
    return secret


def generate_jwt(account_id: UUID) -> str:
    """
    Generate a signed session token bound to an account

    Args:
        account_id: Account UUID

    Returns:
        JWT token string (HS256, JWT_EXPIRE_MINUTES expiry)

    Raises:
        ConfigurationError: signing secret unset or insecure
    """
    secret = signing_secret()
    now = datetime.now(UTC)
    payload = {
        "id": str(account_id),
        "exp": now + timedelta(minutes=ApplicationConfig.JWT_EXPIRE_MINUTES),
        "iat": now,
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode a session token

    Does not look at the account itself; callers re-fetch the account and
    check its lifecycle state on every request.

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid or expired
    """
    try:
        secret = signing_secret()
    except ConfigurationError as exc:
        logger.error(f"Cannot verify tokens: {exc}")
        return None

    try:
        return jwt.decode(token, secret, algorithms=[ALGORITHM])
    except JWTError:
        return None


def resolve_account_id(token: str) -> Optional[UUID]:
    """Account id carried by a valid token, or None"""
    payload = verify_jwt(token)
    if payload is None:
        return None
    try:
        return UUID(payload["id"])
    except (KeyError, TypeError, ValueError):
        return None
