import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./clinic.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENVIRONMENT = data.get("ENVIRONMENT", "development")

    # Session tokens
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_EXPIRE_MINUTES = int(data.get("JWT_EXPIRE_MINUTES", 7 * 24 * 60))

    # Credentials
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    RESET_TOKEN_TTL_MINUTES = int(data.get("RESET_TOKEN_TTL_MINUTES", 30))
    EXPOSE_RESET_TOKEN_ON_EMAIL_FAILURE = bool(
        data.get("EXPOSE_RESET_TOKEN_ON_EMAIL_FAILURE", False)
    )

    FRONTEND_URL = data.get("FRONTEND_URL", "http://localhost:3000")
    BACKEND_URL = data.get("BACKEND_URL", "http://localhost:8000")

    # Outbound mail
    EMAIL_HOST = data.get("EMAIL_HOST", "")
    EMAIL_PORT = int(data.get("EMAIL_PORT", 587))
    EMAIL_USER = data.get("EMAIL_USER", "")
    EMAIL_PASS = data.get("EMAIL_PASS", "")
    EMAIL_FROM = data.get("EMAIL_FROM", "")

    # OAuth providers
    GOOGLE_CLIENT_ID = data.get("GOOGLE_CLIENT_ID", "")
    GOOGLE_CLIENT_SECRET = data.get("GOOGLE_CLIENT_SECRET", "")
    GOOGLE_CALLBACK_URL = data.get("GOOGLE_CALLBACK_URL", "")
    FACEBOOK_APP_ID = data.get("FACEBOOK_APP_ID", "")
    FACEBOOK_APP_SECRET = data.get("FACEBOOK_APP_SECRET", "")
    FACEBOOK_CALLBACK_URL = data.get("FACEBOOK_CALLBACK_URL", "")

    # Audit log paging
    AUDIT_LOG_DEFAULT_LIMIT = int(data.get("AUDIT_LOG_DEFAULT_LIMIT", 20))
    AUDIT_LOG_MAX_LIMIT = int(data.get("AUDIT_LOG_MAX_LIMIT", 200))
