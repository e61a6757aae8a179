"""Symlink-resolving canonicalization (``realpath`` / ``realdirpath``).

Resolution walks the names of an absolute path one at a time, ``lstat``-ing
each new prefix through a :class:`~lexpath.filesystem.FileSystem`:

- ``.`` is skipped and ``..`` drops the last resolved name (never the root)
- a symlink is read and its target is resolved in place: relative targets
  from the link's parent, absolute ones from their own root
- a missing name fails, unless it is the very last one and the caller asked
  for the tolerant ``realdirpath`` behaviour

Links currently being resolved are marked in a per-call memo so a cycle is
reported as ELOOP the first time it closes; a link counter bounded by
``settings.max_symlinks`` covers long acyclic chains. The filesystem may
change underneath a resolution; no attempt is made to detect that.
"""

from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .config import settings
from .errors import not_found, permission_denied, too_many_links
from .filesystem import FileSystem, OSFileSystem
from .logging import get_logger
from .segments import POSIX, Flavor, parse, render

_Resolved = Tuple[str, Tuple[str, ...]]
_RESOLVING = object()


class Canonicalizer:
    """Resolve paths against a filesystem.

    One instance may serve many calls; the memo and link counter are reset by
    every :meth:`resolve`.
    """

    def __init__(
        self,
        fs: Optional[FileSystem] = None,
        *,
        flavor: Flavor = POSIX,
        max_links: Optional[int] = None,
    ) -> None:
        self.fs: FileSystem = fs if fs is not None else OSFileSystem()
        self.flavor = flavor
        self.max_links = settings.max_symlinks if max_links is None else max_links
        self._memo: Dict[str, Union[_Resolved, object]] = {}
        self._links = 0
        self._log = get_logger("canonical")

    def resolve(self, path: str, base_dir: Optional[str] = None, *, strict: bool = True) -> str:
        """Return the canonical absolute form of ``path``.

        Args:
            path: Path to resolve; relative paths start at ``base_dir``
            base_dir: Directory for relative paths (defaults to the working
                directory of the filesystem)
            strict: When False, the final component may be missing

        Raises:
            PathNotFoundError: a component does not exist
            TooManyLinksError: symlinks loop or exceed ``max_links``
            PathPermissionError: a component cannot be inspected
        """
        seg = parse(path, self.flavor)
        names: List[str] = list(seg.names)
        root = seg.root
        if not root:
            if base_dir is not None:
                start = parse(base_dir, self.flavor)
                names = list(start.names) + names
                root = start.root
            if not root:
                cwd = parse(self.fs.current_working_directory(), self.flavor)
                names = list(cwd.names) + names
                root = cwd.root

        self._memo = {}
        self._links = 0
        root, resolved = self._walk(root, names, last=True, strict=strict)
        return render(root, resolved, self.flavor)

    def _walk(self, root: str, names: Iterable[str], *, last: bool, strict: bool) -> _Resolved:
        pending = deque(names)
        resolved: List[str] = []
        while pending:
            name = pending.popleft()
            if name == ".":
                continue
            if name == "..":
                if resolved:
                    resolved.pop()
                continue

            current = render(root, resolved + [name], self.flavor)
            cached = self._memo.get(current)
            if cached is _RESOLVING:
                self._log.warning("symlink loop detected", path=current)
                raise too_many_links(current)
            if cached is not None:
                root, done = cached  # type: ignore[misc]
                resolved = list(done)
                continue

            info = self.fs.lstat(current)
            if info.permission_denied:
                raise permission_denied(current)
            if not info.exists:
                if strict or not last or pending:
                    self._log.warning("missing path component", path=current)
                    raise not_found(current)
                resolved.append(name)
                break

            if not info.is_symlink:
                resolved.append(name)
                self._memo[current] = (root, tuple(resolved))
                continue

            self._links += 1
            if self._links > self.max_links:
                self._log.warning("symlink limit exceeded", path=current, limit=self.max_links)
                raise too_many_links(current)

            self._memo[current] = _RESOLVING
            target = self.fs.read_link(current)
            self._log.debug("following symlink", link=current, target=target)
            link = parse(target, self.flavor)
            tail_last = last and not pending
            if link.root:
                outcome = self._walk(link.root, link.names, last=tail_last, strict=strict)
            else:
                outcome = self._walk(root, resolved + list(link.names), last=tail_last, strict=strict)
            self._memo[current] = outcome
            root, done = outcome
            resolved = list(done)

        return root, tuple(resolved)


def realpath(
    path: str,
    base_dir: Optional[str] = None,
    *,
    fs: Optional[FileSystem] = None,
    flavor: Flavor = POSIX,
) -> str:
    """Canonical path of an existing file; every component must exist."""
    return Canonicalizer(fs, flavor=flavor).resolve(path, base_dir, strict=True)


def realdirpath(
    path: str,
    base_dir: Optional[str] = None,
    *,
    fs: Optional[FileSystem] = None,
    flavor: Flavor = POSIX,
) -> str:
    """Like :func:`realpath`, but the last component need not exist."""
    return Canonicalizer(fs, flavor=flavor).resolve(path, base_dir, strict=False)


__all__ = ["Canonicalizer", "realpath", "realdirpath"]
