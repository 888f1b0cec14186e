from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

_LOG_LEVELS = {"critical", "error", "warning", "info", "debug"}
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - TASKS_DB_PATH: path to the sqlite db file. Default './tasks.db'
    - TASKS_HOST: address the server binds to. Default '0.0.0.0'
    - TASKS_PORT: port the server listens on. Default 8080
    - TASKS_LOG_LEVEL: one of critical, error, warning, info, debug. Default 'info'
    - TASKS_STRICT_DUE_DATES: 'true' to fail the list endpoint on an unparseable
      stored due_date instead of reporting the zero timestamp (default: false)
    """

    db_path: str = "./tasks.db"
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "info"
    strict_due_dates: bool = False


def _env(name: str) -> Optional[str]:
    """Return the stripped value of an env var, or None when unset or blank."""
    value = (os.getenv(name) or "").strip()
    return value or None


def _env_flag(name: str, default: bool) -> bool:
    value = (_env(name) or "").lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    return default


def _env_port(name: str, default: int) -> int:
    try:
        port = int(_env(name) or default)
    except ValueError:
        return default
    return port if 0 < port < 65536 else default


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    defaults = Settings()

    log_level = (_env("TASKS_LOG_LEVEL") or defaults.log_level).lower()
    if log_level not in _LOG_LEVELS:
        log_level = defaults.log_level

    return Settings(
        db_path=_env("TASKS_DB_PATH") or defaults.db_path,
        host=_env("TASKS_HOST") or defaults.host,
        port=_env_port("TASKS_PORT", defaults.port),
        log_level=log_level,
        strict_due_dates=_env_flag("TASKS_STRICT_DUE_DATES", defaults.strict_due_dates),
    )
