import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


def _get(key: str, default):
    """Environment variable wins over env.yaml, env.yaml over the default."""
    if key in os.environ:
        raw = os.environ[key]
        # Strings stay verbatim; numbers, booleans and lists parse as YAML
        return raw if isinstance(default, str) else yaml.safe_load(raw)
    return data.get(key, default)


class ApplicationConfig:
    DB_URI = _get("DB_URI", "sqlite+aiosqlite:///./auth.db")
    API_PREFIX = _get("API_PREFIX", "/api/v1")
    API_PORT = _get("API_PORT", 3000)
    API_HOST = _get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = _get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = _get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = _get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(_get("ENABLE_LOGGING_MIDDLEWARE", 1))

    # Token signing: two independent secrets, one per token class
    JWT_ACCESS_SECRET = _get("JWT_ACCESS_SECRET", "")
    JWT_REFRESH_SECRET = _get("JWT_REFRESH_SECRET", "")
    JWT_ALGORITHM = _get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_TTL_MINUTES = int(_get("ACCESS_TOKEN_TTL_MINUTES", 30))
    REFRESH_TOKEN_TTL_DAYS = int(_get("REFRESH_TOKEN_TTL_DAYS", 30))
    TOKEN_LEEWAY_SECONDS = int(_get("TOKEN_LEEWAY_SECONDS", 5))

    # Credential cookies and token extraction
    AUTH_COOKIE_DOMAIN = _get("AUTH_COOKIE_DOMAIN", "localhost")
    ALLOW_QUERY_TOKEN = bool(_get("ALLOW_QUERY_TOKEN", False))

    BCRYPT_ROUNDS = int(_get("BCRYPT_ROUNDS", 12))
