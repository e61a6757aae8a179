"""Structured logging for lexpath."""

from .redaction import DataRedactor
from .structured import LogLevel, StructuredLogger, create_logger, get_logger

__all__ = [
    "StructuredLogger",
    "LogLevel",
    "create_logger",
    "get_logger",
    "DataRedactor",
]
