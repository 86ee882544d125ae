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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./servicedesk_auth.db")
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(data.get("ACCESS_TOKEN_EXPIRE_MINUTES", 15))
    # Reject access tokens of users holding no live refresh token
    ENFORCE_SESSION_REVOCATION = bool(data.get("ENFORCE_SESSION_REVOCATION", False))
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
    FRONTEND_URL = data.get("FRONTEND_URL", "http://localhost:3000")
    EMAIL_API_URL = data.get("EMAIL_API_URL", "")
    EMAIL_API_KEY = data.get("EMAIL_API_KEY", "")
    EMAIL_FROM = data.get("EMAIL_FROM", "Service Desk <no-reply@localhost>")
    RATE_LIMIT_ENABLED = bool(data.get("RATE_LIMIT_ENABLED", True))
    RATE_LIMIT_DEFAULT = data.get("RATE_LIMIT_DEFAULT", "100/minute")
    RATE_LIMIT_STORAGE_URI = data.get("RATE_LIMIT_STORAGE_URI", "memory://")
