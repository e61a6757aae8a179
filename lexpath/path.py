"""Immutable path value with lexical and filesystem-aware operations.

A :class:`Path` is a snapshot of a path string. Nothing is normalized on
construction: ``Path('a/')`` and ``Path('a')`` are different values. Every
operation returns a new value; lexical ones never touch the filesystem.
"""

from __future__ import annotations

import functools
import os
import re
import sys
import types
from typing import Any, ClassVar, Iterator, List, Optional, Tuple

from . import algebra, canonical
from .config import settings
from .filesystem import FileSystem, OSFileSystem
from .segments import (
    POSIX,
    WINDOWS,
    Flavor,
    del_trailing_separator,
    flavor_for,
    parse,
    render,
    root_absorbs_parent,
)

_CONDITION_RE = re.compile(r"\[(.*)\]$")


def _coerce(obj: Any) -> Tuple[str, Any]:
    """Return ``(path string, handle to keep alive)`` for a constructor argument."""
    if isinstance(obj, str):
        return obj, None
    if isinstance(obj, Path):
        return obj._path, obj._handle
    if isinstance(obj, (bytes, os.PathLike)):
        return os.fsdecode(os.fspath(obj)), None
    name = getattr(obj, "name", None)
    if isinstance(name, str) and hasattr(obj, "close"):
        # open file object: its path is only meaningful while the file lives
        return name, obj
    raise TypeError(f"expected str, os.PathLike or named file object, not {type(obj).__name__}")


def _fs(fs: Optional[FileSystem]) -> FileSystem:
    return fs if fs is not None else OSFileSystem()


def _caller_file(depth: int = 1) -> str:
    """Source file of the code ``depth`` frames above the function calling this."""
    return sys._getframe(depth + 1).f_code.co_filename


class _hybridmethod:
    """Bind to the instance when there is one, otherwise to the class."""

    def __init__(self, func: Any) -> None:
        self.func = func
        self.class_func: Any = None
        self.__doc__ = func.__doc__

    def classmethod(self, class_func: Any) -> "_hybridmethod":
        self.class_func = class_func
        return self

    def __get__(self, obj: Any, objtype: Any = None) -> Any:
        if obj is None:
            return types.MethodType(self.class_func, objtype)
        return types.MethodType(self.func, obj)


@functools.total_ordering
class Path:
    """A filesystem path as an immutable string value.

    ``Path(p)`` where ``p`` already is a ``Path`` returns ``p`` itself. Several
    arguments are joined with the separator, as written.
    """

    __slots__ = ("_path", "_handle")

    flavor: ClassVar[Flavor] = flavor_for(settings.flavor)

    _path: str
    _handle: Any

    def __new__(cls, *parts: Any) -> "Path":
        if len(parts) == 1 and isinstance(parts[0], cls):
            return parts[0]
        if not parts:
            path, handle = ".", None
        elif len(parts) == 1:
            path, handle = _coerce(parts[0])
        else:
            path, handle = cls.flavor.sep.join(_coerce(p)[0] for p in parts), None
        self = object.__new__(cls)
        object.__setattr__(self, "_path", path)
        object.__setattr__(self, "_handle", handle)
        return self

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._path,))

    def _new(self, path: str) -> "Path":
        return type(self)(path)

    @classmethod
    def _other(cls, other: Any) -> "Path":
        return other if isinstance(other, Path) else cls(other)

    # ---------- Value protocol ----------
    def __str__(self) -> str:
        return self._path

    def __fspath__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._path!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash(self._path)

    def _sort_key(self) -> Tuple[str, str]:
        # separators sort before every other character: a < a/ < a/b < a. < a0
        # ties between different separators fall back to the raw string
        key = self._path
        for sep in self.flavor.separators:
            key = key.replace(sep, "\0")
        return key, self._path

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    # ---------- Lexical algebra ----------
    def cleanpath(self, conservative: bool = False) -> "Path":
        return self._new(algebra.cleanpath(self._path, conservative, self.flavor))

    def __add__(self, other: Any) -> "Path":
        return self._new(algebra.plus(self._path, str(self._other(other)), self.flavor))

    def __radd__(self, other: Any) -> "Path":
        return self._other(other) + self

    def __truediv__(self, part: Any) -> "Path":
        return self.join(part)

    def __rtruediv__(self, other: Any) -> "Path":
        return self._other(other).join(self)

    def join(self, *parts: Any) -> "Path":
        strings = [str(self._other(p)) for p in parts]
        return self._new(algebra.join(self._path, *strings, flavor=self.flavor))

    @property
    def parent(self) -> "Path":
        return self._new(algebra.parent(self._path, self.flavor))

    def ascend(self) -> List["Path"]:
        """This path, then each ancestor as written, longest first."""
        return [self if s == self._path else self._new(s) for s in algebra.ascend(self._path, self.flavor)]

    def descend(self) -> List["Path"]:
        """Each ancestor as written, then this path, shortest first."""
        return list(reversed(self.ascend()))

    def relative_path_from(self, base: Any) -> "Path":
        """Path that leads from ``base`` to this path (both cleaned first).

        Raises:
            PathArgumentError: absolute vs relative mismatch, or ``base`` has a
                ``..`` that cannot be climbed back.
        """
        base_path = str(self._other(base))
        return self._new(algebra.relative_path_from(self._path, base_path, self.flavor))

    def relative_to(self, base: Any) -> "Path":
        return self.relative_path_from(base)

    __mod__ = relative_to

    # ---------- Structure ----------
    @property
    def _segments(self):
        return parse(self._path, self.flavor)

    def is_absolute(self) -> bool:
        return not self._segments.is_relative

    def is_relative(self) -> bool:
        return self._segments.is_relative

    def is_root(self) -> bool:
        seg = self._segments
        return not seg.names and root_absorbs_parent(seg.root, self.flavor)

    @property
    def filenames(self) -> Tuple[str, ...]:
        return self._segments.names

    def each_filename(self) -> Iterator[str]:
        return iter(self.filenames)

    def basename(self, suffix: Optional[str] = None) -> "Path":
        seg = self._segments
        if not seg.names:
            return self._new(seg.root)
        name = seg.names[-1]
        if suffix == ".*":
            ext = _extname(name)
            if ext:
                name = name[: -len(ext)]
        elif suffix and name.endswith(suffix) and name != suffix:
            name = name[: -len(suffix)]
        return self._new(name)

    @property
    def dirname(self) -> "Path":
        seg = self._segments
        if len(seg.names) <= 1:
            return self._new(render(seg.root, (), self.flavor))
        return self._new(del_trailing_separator(self._path[: seg.offsets[-1]], self.flavor))

    @property
    def extname(self) -> str:
        names = self._segments.names
        return _extname(names[-1]) if names else ""

    def split(self) -> Tuple["Path", "Path"]:
        return self.dirname, self.basename()

    def sub_ext(self, replacement: str) -> "Path":
        ext = self.extname
        stem = self._path
        if ext and stem.endswith(ext):
            stem = stem[: -len(ext)]
        return self._new(stem + replacement)

    def inside(self, ancestor: Any) -> bool:
        anc = str(self._other(ancestor))
        if self._path == anc:
            return True
        # a root ancestor (/, //, C:/) already ends in a separator
        prefix = anc if anc and anc[-1] in self.flavor.separators else anc + self.flavor.sep
        return self._path.startswith(prefix)

    def outside(self, ancestor: Any) -> bool:
        return not self.inside(ancestor)

    def expand(self, base: Any = None, fs: Optional[FileSystem] = None) -> "Path":
        """Absolute, cleaned form of this path; ``~`` means the home directory.

        Relative paths are anchored at ``base`` (itself expanded) or the working
        directory. Symlinks are not resolved.
        """
        fs = _fs(fs)
        path = self._path
        if path == "~" or (path[:1] == "~" and path[1:2] in self.flavor.separators):
            path = fs.home_directory() + path[1:]
        if parse(path, self.flavor).is_relative:
            if base is not None:
                anchor = str(self._other(base).expand(fs=fs))
            else:
                anchor = fs.current_working_directory()
            path = algebra.join(anchor, path, flavor=self.flavor)
        return self._new(algebra.cleanpath(path, flavor=self.flavor))

    # ---------- Filesystem-aware ----------
    def realpath(self, base_dir: Any = None, fs: Optional[FileSystem] = None) -> "Path":
        """Canonical absolute path; every component must exist.

        Raises:
            PathNotFoundError, TooManyLinksError, PathPermissionError
        """
        base = None if base_dir is None else str(self._other(base_dir))
        return self._new(canonical.realpath(self._path, base, fs=fs, flavor=self.flavor))

    def realdirpath(self, base_dir: Any = None, fs: Optional[FileSystem] = None) -> "Path":
        """Like :meth:`realpath`, but the last component need not exist."""
        base = None if base_dir is None else str(self._other(base_dir))
        return self._new(canonical.realdirpath(self._path, base, fs=fs, flavor=self.flavor))

    def readlink(self, fs: Optional[FileSystem] = None) -> "Path":
        return self._new(_fs(fs).read_link(self._path))

    def exists(self, fs: Optional[FileSystem] = None) -> bool:
        """True if something (a dangling symlink included) is at this path."""
        try:
            return _fs(fs).lstat(self._path).exists
        except NotADirectoryError:
            # a file in the middle of the path
            return False

    @_hybridmethod
    def backfind(self, name: str, fs: Optional[FileSystem] = None) -> Optional["Path"]:
        """Find ``name`` in the closest ancestor of this path that contains it.

        ``'lib[.git]'`` looks for an ancestor holding ``lib/.git`` and returns
        ``<ancestor>/lib``. Called on the class, the search starts from the
        calling source file.
        """
        fs = _fs(fs)
        condition = ""
        match = _CONDITION_RE.search(name)
        if match:
            condition = match.group(1)
            name = name[: match.start()]
        for ancestor in self.expand(fs=fs).ascend():
            if (ancestor / name / condition).exists(fs):
                return ancestor / name
        return None

    @backfind.classmethod
    def backfind(cls, name: str, fs: Optional[FileSystem] = None) -> Optional["Path"]:
        return cls(_caller_file()).expand(fs=fs).backfind(name, fs)

    # ---------- Caller-relative constructors ----------
    @classmethod
    def here(cls, fs: Optional[FileSystem] = None) -> "Path":
        """Expanded path of the source file calling this."""
        return cls(_caller_file()).expand(fs=fs)

    file = here

    @classmethod
    def dir(cls, fs: Optional[FileSystem] = None) -> "Path":
        """Directory of the source file calling this."""
        return cls(_caller_file()).expand(fs=fs).dirname

    @classmethod
    def relative(cls, path: Any, fs: Optional[FileSystem] = None) -> "Path":
        """``path`` expanded against the directory of the calling source file."""
        base = cls(_caller_file()).expand(fs=fs).dirname
        return cls(path).expand(base, fs=fs)

    @classmethod
    def cwd(cls, fs: Optional[FileSystem] = None) -> "Path":
        return cls(_fs(fs).current_working_directory())

    @classmethod
    def home(cls, fs: Optional[FileSystem] = None) -> "Path":
        return cls(_fs(fs).home_directory())


def _extname(name: str) -> str:
    stem = name.lstrip(".")
    dot = stem.rfind(".")
    if dot <= 0 or dot == len(stem) - 1:
        return ""
    return stem[dot:]


class PosixPath(Path):
    __slots__ = ()
    flavor = POSIX


class WindowsPath(Path):
    __slots__ = ()
    flavor = WINDOWS


__all__ = ["Path", "PosixPath", "WindowsPath"]
