"""Lexical path algebra.

Every function here works on path strings through the segment model only;
nothing touches the filesystem. All functions are total over path strings
except :func:`relative_path_from`, which raises :class:`PathArgumentError` when
the two paths cannot be related.

``..`` handling follows a stack discipline:
- a ``..`` removes the previous ordinary name
- under a root (``/``, ``//``, ``C:/``) a leading ``..`` is absorbed
- in a relative path a leading ``..`` is kept, since the origin is unknown
"""

from __future__ import annotations

from collections import deque
from typing import List

from .errors import PathArgumentError
from .segments import (
    POSIX,
    Flavor,
    del_trailing_separator,
    parse,
    render,
    root_absorbs_parent,
    same_name,
)


def cleanpath(path: str, conservative: bool = False, flavor: Flavor = POSIX) -> str:
    """Return the lexically simplest equivalent of ``path``.

    The default (aggressive) mode resolves ``..`` against preceding names. The
    conservative mode only drops ``.`` names, redundant separators and ``..``
    directly under a root; every other ``..`` is kept because it may cross a
    symlink, and a trailing ``/.`` or separator survives.
    """
    if conservative:
        return _clean_conservative(path, flavor)
    return _clean_aggressive(path, flavor)


def _clean_aggressive(path: str, flavor: Flavor) -> str:
    seg = parse(path, flavor)
    absorbs = root_absorbs_parent(seg.root, flavor)
    stack: List[str] = []
    for name in seg.names:
        if name == ".":
            continue
        if name == "..":
            if stack and stack[-1] != "..":
                stack.pop()
            elif not stack and absorbs:
                continue
            else:
                stack.append(name)
            continue
        stack.append(name)
    return render(seg.root, stack, flavor)


def _clean_conservative(path: str, flavor: Flavor) -> str:
    seg = parse(path, flavor)
    names = [name for name in seg.names if name != "."]
    if root_absorbs_parent(seg.root, flavor):
        while names and names[0] == "..":
            names.pop(0)
    if not names:
        return render(seg.root, (), flavor)

    if names[-1] != ".." and seg.names[-1] == ".":
        names.append(".")
    result = render(seg.root, names, flavor)
    if names[-1] not in (".", "..") and seg.trailing:
        result += flavor.sep
    return result


def plus(base: str, other: str, flavor: Flavor = POSIX) -> str:
    """Concatenate ``other`` onto ``base`` the way the ``+`` operator does.

    Leading ``..`` names of ``other`` cancel trailing names of ``base``; the raw
    text on both sides of the join is otherwise left alone.
    """
    seg2 = parse(other, flavor)
    if seg2.root:
        return other

    pending = deque(zip(seg2.names, seg2.offsets))
    seg1 = parse(base, flavor)
    kept = len(seg1.names)
    end = len(base)

    while True:
        while pending and pending[0][0] == ".":
            pending.popleft()
        if not kept:
            break
        kept -= 1
        name = seg1.names[kept]
        end = seg1.offsets[kept]
        if name == ".":
            continue
        if name == ".." or not pending or pending[0][0] != "..":
            end += len(name)
            kept += 1
            break
        pending.popleft()

    if not kept and root_absorbs_parent(seg1.root, flavor):
        while pending and pending[0][0] == "..":
            pending.popleft()

    if pending:
        suffix = other[pending[0][1]:]
        if kept:
            return base[:end] + flavor.sep + suffix
        return seg1.root + suffix
    if kept:
        return base[:end]
    return render(seg1.root, (), flavor)


def join(base: str, *parts: str, flavor: Flavor = POSIX) -> str:
    """Join ``parts`` onto ``base``; an absolute part discards what precedes it."""
    items = [base, *parts]
    result = items.pop()
    if parse(result, flavor).root:
        return result
    for item in reversed(items):
        result = plus(item, result, flavor)
        if parse(result, flavor).root:
            return result
    return result


def parent(path: str, flavor: Flavor = POSIX) -> str:
    return plus(path, "..", flavor)


def ascend(path: str, flavor: Flavor = POSIX) -> List[str]:
    """Return ``path`` followed by each of its prefixes, longest first.

    A path ending in a separator names a directory as written and is returned
    on its own.
    """
    result = [path]
    seg = parse(path, flavor)
    if seg.trailing:
        return result
    for offset in reversed(seg.offsets):
        prefix = path[:offset]
        if not prefix:
            break
        result.append(del_trailing_separator(prefix, flavor))
    return result


def descend(path: str, flavor: Flavor = POSIX) -> List[str]:
    return list(reversed(ascend(path, flavor)))


def relative_path_from(dest: str, base: str, flavor: Flavor = POSIX) -> str:
    """Return a relative path that leads from ``base`` to ``dest``.

    Raises:
        PathArgumentError: if only one of the paths is absolute (or their roots
            differ), or if ``base`` climbs through a ``..`` whose origin is
            unknown once the common prefix is removed.
    """
    dest_seg = parse(cleanpath(dest, flavor=flavor), flavor)
    base_seg = parse(cleanpath(base, flavor=flavor), flavor)
    if not same_name(dest_seg.root, base_seg.root, flavor):
        raise PathArgumentError(f"different prefix: {dest_seg.root!r} and {base!r}")

    dest_names = [n for n in dest_seg.names if n != "."]
    base_names = [n for n in base_seg.names if n != "."]
    while dest_names and base_names and same_name(dest_names[0], base_names[0], flavor):
        dest_names.pop(0)
        base_names.pop(0)

    if ".." in base_names:
        raise PathArgumentError(f"base directory has ..: {base!r}")

    rel = [".."] * len(base_names) + dest_names
    if not rel:
        return "."
    return flavor.sep.join(rel)


__all__ = [
    "cleanpath",
    "plus",
    "join",
    "parent",
    "ascend",
    "descend",
    "relative_path_from",
]
