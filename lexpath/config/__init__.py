"""lexpath runtime settings.

All settings are backed by environment variables following the LEXPATH_*
naming convention. Values are read once, when this module is imported.

Example:
    >>> from lexpath.config import settings
    >>> settings.max_symlinks
    40

Environment Variables:
    LEXPATH_FLAVOR: Separator convention of ``lexpath.Path``, ``posix`` or ``windows`` (default: posix)
    LEXPATH_MAX_SYMLINKS: Symlinks followed by one canonicalization before ELOOP (default: 40)
    LEXPATH_LOG_LEVEL: Minimum level written by structured loggers (default: warning)
    LEXPATH_LOG_CONSOLE: Echo structured log lines to stderr (default: off)
    LEXPATH_LOG_DIR: Directory receiving ``<component>.jsonl`` log files (default: unset)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable

_PREFIX = "LEXPATH_"


def _env(name: str, default: str) -> str:
    """Get environment variable with LEXPATH_* prefix validation."""
    if not name.startswith(_PREFIX):
        raise ValueError(f"Only {_PREFIX}* env vars are allowed, got: {name}")
    return os.getenv(name, default)


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name, str(default))
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    raw = _env(name, str(default))
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= minimum else default


def _env_choice(name: str, default: str, choices: Iterable[str]) -> str:
    raw = _env(name, default).lower().strip()
    return raw if raw in set(choices) else default


@dataclass(frozen=True)
class Settings:
    """Centralized runtime settings for lexpath.

    Frozen to prevent accidental mutation at runtime. For testing, set the
    environment before reloading this module, or pass explicit values to the
    APIs that accept them.
    """

    flavor: str = _env_choice("LEXPATH_FLAVOR", "posix", ("posix", "windows"))
    max_symlinks: int = _env_int("LEXPATH_MAX_SYMLINKS", 40, minimum=1)

    log_level: str = _env_choice(
        "LEXPATH_LOG_LEVEL", "warning", ("debug", "info", "warning", "error", "critical")
    )
    log_console: bool = _env_bool("LEXPATH_LOG_CONSOLE", False)
    log_dir: str = _env("LEXPATH_LOG_DIR", "")


# Module-level instance for convenient access
settings = Settings()

__all__ = ["settings", "Settings"]
