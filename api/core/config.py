"""
Environment-derived settings.

Every variable treats an empty string the same as unset.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import quote


def get_env(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    db_host: str = "localhost"
    db_port: str = "3306"
    db_user: str = "root"
    db_password: str = "password"
    db_name: str = "coaching_db"
    port: str = "8080"
    log_level: str = "INFO"
    db_connect_attempts: int = 10
    db_connect_delay_seconds: float = 2.0

    def database_dsn(self) -> str:
        user = quote(self.db_user, safe="")
        password = quote(self.db_password, safe="")
        return f"postgresql://{user}:{password}@{self.db_host}:{self.db_port}/{self.db_name}"


def load_settings() -> Settings:
    return Settings(
        db_host=get_env("DB_HOST", "localhost"),
        db_port=get_env("DB_PORT", "3306"),
        db_user=get_env("DB_USER", "root"),
        db_password=get_env("DB_PASSWORD", "password"),
        db_name=get_env("DB_NAME", "coaching_db"),
        port=get_env("PORT", "8080"),
        log_level=get_env("LOG_LEVEL", "INFO").upper(),
        db_connect_attempts=_env_int("DB_CONNECT_ATTEMPTS", 10),
        db_connect_delay_seconds=_env_float("DB_CONNECT_DELAY_SECONDS", 2.0),
    )
