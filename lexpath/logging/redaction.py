"""Redaction of host-identifying data in structured log context."""

from __future__ import annotations

import os
import re
from typing import Any, Dict, List, Optional, Pattern, Union


class DataRedactor:
    """Hide user directories and secrets before they reach a log sink."""

    def __init__(self, custom_patterns: Optional[List[Pattern[str]]] = None) -> None:
        """Initialize redactor with standard and custom patterns.

        Args:
            custom_patterns: Additional regex patterns to redact
        """
        self.patterns: List[Pattern[str]] = [
            # User home directories; the remainder of the path is kept
            re.compile(r"/home/[^/\s]+"),
            re.compile(r"/Users/[^/\s]+"),
            re.compile(r"[A-Za-z]:[\\/]Users[\\/][^\\/\s]+"),
            re.compile(r"/root(?=/|$)"),
            # Tokens and API keys (common patterns)
            re.compile(
                r"(token|key|secret|password|api_key|credential)[\"']?\s*[=:]\s*[\"']?[a-zA-Z0-9_-]{8,}[\"']?",
                re.IGNORECASE,
            ),
        ]
        if custom_patterns:
            self.patterns.extend(custom_patterns)

        # Field names whose values are dropped entirely
        self.sensitive_fields = {
            "password",
            "token",
            "secret",
            "key",
            "auth",
            "credential",
            "api_key",
            "access_token",
        }

    def redact_string(self, text: str) -> str:
        result = text
        for pattern in self.patterns:
            result = pattern.sub("[REDACTED]", result)
        return result

    def redact_path(self, path: Union[str, "os.PathLike[str]"]) -> str:
        """Redact the user-identifying prefix of a path, keeping its tail."""
        return self.redact_string(os.fspath(path))

    def redact_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively redact sensitive data from a context dictionary."""
        result: Dict[str, Any] = {}
        for key, value in data.items():
            if key.lower() in self.sensitive_fields:
                result[key] = "[REDACTED]"
            else:
                result[key] = self._redact_value(value)
        return result

    def _redact_value(self, value: Any) -> Any:
        if isinstance(value, dict):
            return self.redact_dict(value)
        if isinstance(value, (list, tuple)):
            return [self._redact_value(item) for item in value]
        if isinstance(value, str):
            return self.redact_string(value)
        if isinstance(value, os.PathLike):
            return self.redact_path(value)
        return value

    def add_pattern(self, pattern: Union[str, Pattern[str]]) -> None:
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        self.patterns.append(pattern)

    def add_sensitive_field(self, field_name: str) -> None:
        self.sensitive_fields.add(field_name.lower())
