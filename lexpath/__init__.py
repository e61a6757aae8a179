"""lexpath: path values with lexical algebra and symlink-aware canonicalization."""

from .canonical import Canonicalizer, realdirpath, realpath
from .errors import (
    PathArgumentError,
    PathNotFoundError,
    PathPermissionError,
    TooManyLinksError,
)
from .filesystem import FileInfo, FileSystem, OSFileSystem
from .path import Path, PosixPath, WindowsPath
from .segments import POSIX, WINDOWS, Flavor

__all__ = [
    "Path",
    "PosixPath",
    "WindowsPath",
    "Flavor",
    "POSIX",
    "WINDOWS",
    "Canonicalizer",
    "realpath",
    "realdirpath",
    "FileInfo",
    "FileSystem",
    "OSFileSystem",
    "PathArgumentError",
    "PathNotFoundError",
    "PathPermissionError",
    "TooManyLinksError",
]
