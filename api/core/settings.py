"""
Process-wide configuration read from environment variables.

Values are read on demand and never cached, so tests can override them with
`monkeypatch.setenv`. Required values are checked once at startup by
`require_startup_settings()`.
"""

from __future__ import annotations

import os

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


class SettingsError(RuntimeError):
    pass


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _required(name: str) -> str:
    value = _env_str(name)
    if not value:
        raise SettingsError(f"{name} is not set.")
    return value


def database_url() -> str:
    return _required("DATABASE_URL")


def jwt_secret() -> str:
    # No fallback: the signing key must come from the environment.
    return _required("JWT_SECRET")


def jwt_algorithm() -> str:
    return _env_str("JWT_ALG", "HS256")


def access_token_expire_minutes() -> int:
    return _env_int("ACCESS_TOKEN_EXPIRE_MIN", 60)


def bcrypt_rounds() -> int:
    # bcrypt accepts 4..31.
    return max(4, min(_env_int("BCRYPT_ROUNDS", 12), 31))


def db_pool_min_size() -> int:
    return _env_int("DB_POOL_MIN_SIZE", 1)


def db_pool_max_size() -> int:
    return _env_int("DB_POOL_MAX_SIZE", 5)


def db_command_timeout_s() -> int:
    return _env_int("DB_COMMAND_TIMEOUT_S", 30)


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def cors_origins() -> list[str]:
    raw = _env_str("CORS_ORIGINS")
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def require_startup_settings() -> None:
    """
    Fail fast when a required value is missing.
    """
    database_url()
    jwt_secret()
