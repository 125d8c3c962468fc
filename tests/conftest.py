import pytest

from config import ApplicationConfig

# Cheap hashing and a real signing secret for every test run
ApplicationConfig.BCRYPT_ROUNDS = 4
ApplicationConfig.JWT_SECRET = "test-signing-secret"
ApplicationConfig.FRONTEND_URL = "http://frontend.test"
ApplicationConfig.EXPOSE_RESET_TOKEN_ON_EMAIL_FAILURE = False


@pytest.fixture
def restore_config():
    """Snapshot ApplicationConfig attributes a test mutates and restore them afterwards."""
    saved = dict(vars(ApplicationConfig))
    yield ApplicationConfig
    for key, value in saved.items():
        if not key.startswith("__"):
            setattr(ApplicationConfig, key, value)
