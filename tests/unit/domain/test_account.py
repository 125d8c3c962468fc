from src.domain.entities import Account, AccountState, CredentialState, Role, normalize_email


def _account(**kwargs) -> Account:
    defaults = dict(name="A", email="a@example.com", login_id="a@example.com")
    defaults.update(kwargs)
    return Account(**defaults)


def test_defaults():
    account = _account()
    assert account.state == AccountState.active
    assert account.role == Role.staff
    assert account.is_active
    assert not account.is_deleted
    assert account.internal_id is not None
    assert account.internal_id != account.id


def test_lifecycle_transitions():
    account = _account(reset_token_hash="abc")

    account.mark_suspended()
    assert account.state == AccountState.suspended
    assert not account.is_active
    assert not account.is_deleted

    account.mark_deleted()
    assert account.is_deleted
    assert account.deleted_at is not None
    assert account.reset_token_hash is None
    assert account.reset_token_expires_at is None

    account.mark_active()
    assert account.is_active
    assert account.deleted_at is None


def test_credential_state():
    with_password = _account(password_hash="$2b$04$hash")
    without_password = _account()

    assert with_password.credential_state(0) == CredentialState.password
    assert with_password.credential_state(1) == CredentialState.both
    assert without_password.credential_state(2) == CredentialState.oauth_only
    assert without_password.credential_state(0) is None


def test_normalize_email():
    assert normalize_email("  Someone@Example.COM ") == "someone@example.com"
