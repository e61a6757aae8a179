"""Structured JSON-lines logging with a consistent entry format."""

from __future__ import annotations

import json
import sys
import time
import uuid
from enum import Enum
from pathlib import Path as FsPath
from typing import Any, Dict, Optional, TextIO, Union

from ..config import settings
from .redaction import DataRedactor


class LogLevel(Enum):
    """Standard log levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _RANKS[self]


_RANKS = {level: i for i, level in enumerate(LogLevel)}


class StructuredLogger:
    """Structured logger writing one JSON object per line."""

    def __init__(
        self,
        component: str,
        session_id: Optional[str] = None,
        output_file: Optional[Union[str, FsPath, TextIO]] = None,
        enable_console: bool = False,
        redactor: Optional[DataRedactor] = None,
        min_level: Union[LogLevel, str] = LogLevel.WARNING,
    ) -> None:
        """Initialize structured logger.

        Args:
            component: Component identifier (e.g., 'canonical', 'cli')
            session_id: Optional ID correlating entries of one run
            output_file: Optional file path or handle for log output
            enable_console: Whether to echo entries to stderr
            redactor: Optional data redactor for host paths and secrets
            min_level: Entries below this level are discarded
        """
        self.component = component
        self.session_id = session_id or str(uuid.uuid4())[:8]
        self.start_time = time.time()
        self.redactor = redactor or DataRedactor()
        self.min_level = LogLevel(min_level) if isinstance(min_level, str) else min_level

        self.console_enabled = enable_console
        self.log_file: Optional[TextIO] = None
        self._owns_file = False

        if output_file is not None:
            if isinstance(output_file, (str, FsPath)):
                log_path = FsPath(output_file)
                log_path.parent.mkdir(parents=True, exist_ok=True)
                self.log_file = open(log_path, "a", encoding="utf-8")
                self._owns_file = True
            else:
                self.log_file = output_file

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level.rank >= self.min_level.rank and (
            self.console_enabled or self.log_file is not None
        )

    def _format_log_entry(self, level: LogLevel, message: str, **context: Any) -> Dict[str, Any]:
        safe_context = self.redactor.redact_dict(context)
        return {
            "timestamp": time.time(),
            "iso_timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime()) + "Z",
            "level": level.value,
            "component": self.component,
            "session_id": self.session_id,
            "session_time": time.time() - self.start_time,
            "message": message,
            **safe_context,
        }

    def _write_log(self, entry: Dict[str, Any]) -> None:
        json_line = json.dumps(entry, default=str, separators=(",", ":"))
        if self.console_enabled:
            print(json_line, file=sys.stderr, flush=True)
        if self.log_file is not None:
            self.log_file.write(json_line + "\n")
            self.log_file.flush()

    def log(self, level: LogLevel, message: str, **context: Any) -> None:
        if not self.is_enabled_for(level):
            return
        self._write_log(self._format_log_entry(level, message, **context))

    def debug(self, message: str, **context: Any) -> None:
        self.log(LogLevel.DEBUG, message, **context)

    def info(self, message: str, **context: Any) -> None:
        self.log(LogLevel.INFO, message, **context)

    def warning(self, message: str, **context: Any) -> None:
        self.log(LogLevel.WARNING, message, **context)

    def error(self, message: str, **context: Any) -> None:
        self.log(LogLevel.ERROR, message, **context)

    def critical(self, message: str, **context: Any) -> None:
        self.log(LogLevel.CRITICAL, message, **context)

    def close(self) -> None:
        """Close the log file if this logger opened it."""
        if self.log_file is not None and self._owns_file:
            self.log_file.close()
        self.log_file = None


def create_logger(
    component: str,
    session_id: Optional[str] = None,
    log_dir: Optional[Union[str, FsPath]] = None,
    **kwargs: Any,
) -> StructuredLogger:
    """Factory function creating a structured logger from ``settings``.

    Args:
        component: Component identifier
        session_id: Optional session ID for correlation
        log_dir: Directory for the log file (``LEXPATH_LOG_DIR`` if not provided)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        Configured StructuredLogger instance
    """
    if log_dir is None:
        log_dir = settings.log_dir or None
    kwargs.setdefault("enable_console", settings.log_console)
    kwargs.setdefault("min_level", settings.log_level)

    output_file = None
    if log_dir:
        output_file = FsPath(log_dir) / f"{component}.jsonl"

    return StructuredLogger(
        component=component, session_id=session_id, output_file=output_file, **kwargs
    )


_loggers: Dict[str, StructuredLogger] = {}


def get_logger(component: str) -> StructuredLogger:
    """Return the shared logger for ``component``, creating it on first use."""
    logger = _loggers.get(component)
    if logger is None:
        logger = _loggers[component] = create_logger(component)
    return logger
