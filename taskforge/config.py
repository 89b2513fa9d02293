"""Settings loaded from TASKFORGE_* environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

ENV_PREFIX = "TASKFORGE"


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True)
class Settings:
    data_file: Path
    log_dir: Path
    log_level: str
    file_logging: bool
    theme: str
    notify_interval: float

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            data_file=_env_path(_k("DATA_FILE"), Path("tasks.json")),
            log_dir=_env_path(_k("LOG_DIR"), Path(".local/taskforge")),
            log_level=_env(_k("LOG_LEVEL"), "WARNING").upper(),
            file_logging=_env_bool(_k("FILE_LOG"), True),
            theme=_env(_k("THEME"), "dracula").lower(),
            notify_interval=_env_float(_k("NOTIFY_INTERVAL"), 30.0),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
