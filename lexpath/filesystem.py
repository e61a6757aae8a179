"""Filesystem collaborator used by canonicalization.

The core never calls ``os`` directly; it goes through a :class:`FileSystem`
so tests (and embedders with virtual filesystems) can supply their own.
"""

from __future__ import annotations

import os
import stat as _stat
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class FileInfo:
    """What canonicalization needs to know about one path, without following it."""

    exists: bool
    is_symlink: bool = False
    is_directory: bool = False
    permission_denied: bool = False


MISSING = FileInfo(exists=False)
DENIED = FileInfo(exists=False, permission_denied=True)


@runtime_checkable
class FileSystem(Protocol):
    def lstat(self, path: str) -> FileInfo: ...

    def read_link(self, path: str) -> str: ...

    def current_working_directory(self) -> str: ...

    def home_directory(self) -> str: ...


class OSFileSystem:
    """:class:`FileSystem` backed by the host OS."""

    def lstat(self, path: str) -> FileInfo:
        try:
            st = os.lstat(path)
        except FileNotFoundError:
            return MISSING
        except PermissionError:
            return DENIED
        return FileInfo(
            exists=True,
            is_symlink=_stat.S_ISLNK(st.st_mode),
            is_directory=_stat.S_ISDIR(st.st_mode),
        )

    def read_link(self, path: str) -> str:
        return os.readlink(path)

    def current_working_directory(self) -> str:
        return os.getcwd()

    def home_directory(self) -> str:
        return os.path.expanduser("~")


__all__ = ["FileInfo", "FileSystem", "OSFileSystem", "MISSING", "DENIED"]
