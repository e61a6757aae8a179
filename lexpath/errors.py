"""Error kinds raised by lexpath.

The lexical algebra only ever raises :class:`PathArgumentError`. The
canonicalizer raises the OS-flavoured errors below so callers can keep
catching ``FileNotFoundError``/``PermissionError``/``OSError`` as they would
for ``os.path.realpath(..., strict=True)``.
"""

from __future__ import annotations

import errno
import os


class PathArgumentError(ValueError):
    """Raised when two paths cannot be related lexically."""


class PathNotFoundError(FileNotFoundError):
    """Raised when canonicalization reaches a component that does not exist."""


class TooManyLinksError(OSError):
    """Raised when symlink resolution loops or exceeds the link bound."""


class PathPermissionError(PermissionError):
    """Raised when the filesystem refuses to let a component be inspected."""


def not_found(path: str) -> PathNotFoundError:
    return PathNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)


def too_many_links(path: str) -> TooManyLinksError:
    return TooManyLinksError(errno.ELOOP, os.strerror(errno.ELOOP), path)


def permission_denied(path: str) -> PathPermissionError:
    return PathPermissionError(errno.EACCES, os.strerror(errno.EACCES), path)


__all__ = [
    "PathArgumentError",
    "PathNotFoundError",
    "TooManyLinksError",
    "PathPermissionError",
    "not_found",
    "too_many_links",
    "permission_denied",
]
