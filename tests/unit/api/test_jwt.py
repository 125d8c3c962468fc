from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from jose import jwt

from src.api.utils.jwt import (
    ALGORITHM,
    generate_jwt,
    resolve_account_id,
    signing_secret,
    verify_jwt,
)
from src.domain.errors import ConfigurationError


def test_round_trip_carries_account_id():
    account_id = uuid4()
    token = generate_jwt(account_id)

    payload = verify_jwt(token)
    assert payload["id"] == str(account_id)
    assert payload["exp"] > payload["iat"]
    assert resolve_account_id(token) == account_id


def test_tampered_token_rejected():
    token = generate_jwt(uuid4())
    assert verify_jwt(token + "x") is None
    assert resolve_account_id("not-a-token") is None


def test_expired_token_rejected():
    now = datetime.now(UTC)
    token = jwt.encode(
        {"id": str(uuid4()), "iat": now - timedelta(hours=2), "exp": now - timedelta(hours=1)},
        signing_secret(),
        algorithm=ALGORITHM,
    )
    assert verify_jwt(token) is None


def test_token_without_id_does_not_resolve():
    token = jwt.encode(
        {"exp": datetime.now(UTC) + timedelta(hours=1)}, signing_secret(), algorithm=ALGORITHM
    )
    assert verify_jwt(token) is not None
    assert resolve_account_id(token) is None


@pytest.mark.parametrize("secret", ["", "dev-secret-key-change-in-production"])
def test_placeholder_secret_refuses_to_sign(restore_config, secret):
    token = generate_jwt(uuid4())
    restore_config.JWT_SECRET = secret

    with pytest.raises(ConfigurationError):
        generate_jwt(uuid4())
    # nor accept tokens
    assert verify_jwt(token) is None
