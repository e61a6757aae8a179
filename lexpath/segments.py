"""Segment model: split a path string into a root marker and its names.

This module is pure string handling. No filesystem I/O is performed here.

Root markers:
- ``''``   relative path (no leading separator)
- ``'/'``  absolute path; one leading separator, or three and more
- ``'//'`` absolute path with exactly two leading separators, kept literally
- ``'C:'`` / ``'C:/'`` drive-relative / drive-absolute, only for flavors with
  drive letters

Names are the non-empty components between separators. ``.`` and ``..`` are
ordinary names at this level; the algebra gives them meaning.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(frozen=True)
class Flavor:
    """Separator conventions used to parse and render paths."""

    name: str
    separators: str = "/"
    drive_letters: bool = False
    case_sensitive: bool = True

    @property
    def sep(self) -> str:
        return self.separators[0]


POSIX = Flavor("posix")
WINDOWS = Flavor("windows", separators="/\\", drive_letters=True, case_sensitive=False)

_FLAVORS = {f.name: f for f in (POSIX, WINDOWS)}


def flavor_for(name: str) -> Flavor:
    try:
        return _FLAVORS[name.lower().strip()]
    except KeyError:
        raise ValueError(f"unknown path flavor: {name!r} (expected one of {sorted(_FLAVORS)})")


@dataclass(frozen=True)
class Segments:
    """Parsed form of a path string.

    ``offsets[i]`` is where ``names[i]`` starts in the source string, which lets
    callers keep untouched raw text (doubled separators and all) around.
    """

    root: str
    names: Tuple[str, ...]
    offsets: Tuple[int, ...]
    trailing: bool

    @property
    def is_relative(self) -> bool:
        return not self.root


def _split_root(path: str, flavor: Flavor) -> Tuple[str, int]:
    seps = flavor.separators
    start = 0
    drive = ""
    if flavor.drive_letters and len(path) >= 2 and path[1] == ":" and path[0].isalpha():
        drive = path[:2]
        start = 2

    end = start
    while end < len(path) and path[end] in seps:
        end += 1
    run = end - start

    if drive:
        return drive + (flavor.sep if run else ""), end
    if run == 0:
        return "", end
    if run == 2:
        return flavor.sep * 2, end
    return flavor.sep, end


def parse(path: str, flavor: Flavor = POSIX) -> Segments:
    """Split ``path`` into its root marker and names."""
    seps = flavor.separators
    root, pos = _split_root(path, flavor)

    names: list[str] = []
    offsets: list[int] = []
    n = len(path)
    while pos < n:
        if path[pos] in seps:
            pos += 1
            continue
        start = pos
        while pos < n and path[pos] not in seps:
            pos += 1
        names.append(path[start:pos])
        offsets.append(start)

    trailing = bool(names) and path[-1] in seps
    return Segments(root, tuple(names), tuple(offsets), trailing)


def render(root: str, names: Sequence[str], flavor: Flavor = POSIX) -> str:
    """Inverse of :func:`parse` modulo redundant and trailing separators."""
    if names:
        return root + flavor.sep.join(names)
    if not root:
        return "."
    if root.endswith(":"):
        # bare drive: current directory of that drive
        return root + "."
    return root


def root_absorbs_parent(root: str, flavor: Flavor = POSIX) -> bool:
    """True when a leading ``..`` under ``root`` refers to the root itself."""
    return any(ch in flavor.separators for ch in root)


def same_name(a: str, b: str, flavor: Flavor = POSIX) -> bool:
    if flavor.case_sensitive:
        return a == b
    return a.casefold() == b.casefold()


def has_trailing_separator(path: str, flavor: Flavor = POSIX) -> bool:
    return parse(path, flavor).trailing


def del_trailing_separator(path: str, flavor: Flavor = POSIX) -> str:
    """Drop separators after the last name; a root-only path renders its root."""
    seg = parse(path, flavor)
    if not seg.names:
        if not any(ch in flavor.separators for ch in path):
            return path
        return render(seg.root, (), flavor)
    return path[: seg.offsets[-1] + len(seg.names[-1])]


__all__ = [
    "Flavor",
    "POSIX",
    "WINDOWS",
    "flavor_for",
    "Segments",
    "parse",
    "render",
    "root_absorbs_parent",
    "same_name",
    "has_trailing_separator",
    "del_trailing_separator",
]
