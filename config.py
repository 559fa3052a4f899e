import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()

MINUTE_MS = 60 * 1000

DEFAULT_RATE_LIMITS = {
    "auth": {"max_requests": 10, "window_ms": 15 * MINUTE_MS},
    "subscription": {"max_requests": 5, "window_ms": 60 * MINUTE_MS},
    "church": {"max_requests": 20, "window_ms": 15 * MINUTE_MS},
    "verse": {"max_requests": 20, "window_ms": 60 * MINUTE_MS},
    "default": {"max_requests": 100, "window_ms": 15 * MINUTE_MS},
}

DEFAULT_SUBSCRIPTION_PRICING = {"basic": 9.99, "premium": 29.99}


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./congregation.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    ACCESS_TOKEN_TTL_MINUTES = int(data.get("ACCESS_TOKEN_TTL_MINUTES", 60))
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
    # A YAML entry for one quota replaces only that quota
    RATE_LIMITS = {**DEFAULT_RATE_LIMITS, **data.get("RATE_LIMITS", {})}
    AUDIT_RETENTION_DAYS = int(data.get("AUDIT_RETENTION_DAYS", 365))
    AUDIT_SWEEP_BATCH_SIZE = int(data.get("AUDIT_SWEEP_BATCH_SIZE", 500))
    RATE_LIMIT_RETENTION_HOURS = int(data.get("RATE_LIMIT_RETENTION_HOURS", 24))
    CHURCH_CODE_MAX_ATTEMPTS = int(data.get("CHURCH_CODE_MAX_ATTEMPTS", 10))
    SUBSCRIPTION_PRICING = {
        **DEFAULT_SUBSCRIPTION_PRICING,
        **data.get("SUBSCRIPTION_PRICING", {}),
    }
