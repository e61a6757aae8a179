"""Command line front end: ``lexpath <command> PATH ...``.

Examples:
    lexpath clean a/b/../c            # a/c
    lexpath relative /a/b/c /a/d      # ../b/c
    lexpath realpath --dir build/out  # resolved even if out/ does not exist yet
    lexpath --json descend /usr/bin   # {"command":"descend", ...}
"""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Dict, List, Optional, Sequence, Type, Union

from pydantic import BaseModel, Field

from ..errors import PathArgumentError
from ..logging import get_logger
from ..path import Path, PosixPath, WindowsPath

_FLAVORS: Dict[str, Type[Path]] = {"posix": PosixPath, "windows": WindowsPath}


class PathReport(BaseModel):
    """Machine-readable outcome of one command."""

    command: str = Field(description="Sub-command that ran")
    args: List[str] = Field(default_factory=list, description="Path arguments as given")
    result: Optional[str] = Field(default=None, description="Single path result")
    results: Optional[List[str]] = Field(default=None, description="Sequence result (ascend/descend)")
    error: Optional[str] = Field(default=None, description="Error message when the command failed")


Outcome = Union[Path, List[Path]]


def _clean(cls: Type[Path], ns: argparse.Namespace) -> Outcome:
    return cls(ns.path).cleanpath(conservative=ns.conservative)


def _join(cls: Type[Path], ns: argparse.Namespace) -> Outcome:
    return cls(ns.base).join(*ns.parts)


def _parent(cls: Type[Path], ns: argparse.Namespace) -> Outcome:
    return cls(ns.path).parent


def _relative(cls: Type[Path], ns: argparse.Namespace) -> Outcome:
    return cls(ns.path).relative_path_from(cls(ns.base))


def _realpath(cls: Type[Path], ns: argparse.Namespace) -> Outcome:
    path = cls(ns.path)
    if ns.dir:
        return path.realdirpath(ns.base)
    return path.realpath(ns.base)


def _ascend(cls: Type[Path], ns: argparse.Namespace) -> Outcome:
    return cls(ns.path).ascend()


def _descend(cls: Type[Path], ns: argparse.Namespace) -> Outcome:
    return cls(ns.path).descend()


_COMMANDS: Dict[str, Callable[[Type[Path], argparse.Namespace], Outcome]] = {
    "clean": _clean,
    "join": _join,
    "parent": _parent,
    "relative": _relative,
    "realpath": _realpath,
    "ascend": _ascend,
    "descend": _descend,
}


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="lexpath", description="Lexical and symlink-aware path tools")
    ap.add_argument("--json", action="store_true", help="print a JSON report")
    ap.add_argument("--flavor", choices=sorted(_FLAVORS), default=None, help="separator convention")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("clean", help="lexically normalize PATH")
    p.add_argument("path")
    p.add_argument("--conservative", action="store_true", help="keep '..' that may cross symlinks")

    p = sub.add_parser("join", help="join PARTS onto BASE")
    p.add_argument("base")
    p.add_argument("parts", nargs="+")

    p = sub.add_parser("parent", help="parent of PATH")
    p.add_argument("path")

    p = sub.add_parser("relative", help="PATH relative to BASE")
    p.add_argument("path")
    p.add_argument("base")

    p = sub.add_parser("realpath", help="resolve symlinks in PATH")
    p.add_argument("path")
    p.add_argument("--base", default=None, help="directory for relative PATH")
    p.add_argument("--dir", action="store_true", help="allow a missing last component")

    for name in ("ascend", "descend"):
        p = sub.add_parser(name, help=f"{name} the prefixes of PATH")
        p.add_argument("path")
    return ap


def _path_args(ns: argparse.Namespace) -> List[str]:
    args: List[str] = []
    for attr in ("path", "base"):
        value = getattr(ns, attr, None)
        if value is not None:
            args.append(value)
    args.extend(getattr(ns, "parts", None) or [])
    return args


def main(argv: Optional[Sequence[str]] = None) -> int:
    ns = build_parser().parse_args(argv)
    cls = _FLAVORS[ns.flavor] if ns.flavor else Path
    report = PathReport(command=ns.command, args=_path_args(ns))

    try:
        outcome = _COMMANDS[ns.command](cls, ns)
    except (PathArgumentError, OSError) as e:
        get_logger("cli").error("command failed", command=ns.command, error=str(e))
        report.error = str(e)
    else:
        if isinstance(outcome, list):
            report.results = [str(p) for p in outcome]
        else:
            report.result = str(outcome)

    if ns.json:
        print(report.model_dump_json())
    elif report.error is not None:
        print(f"lexpath: {report.error}", file=sys.stderr)
    elif report.results is not None:
        for line in report.results:
            print(line)
    else:
        print(report.result)
    return 1 if report.error is not None else 0


if __name__ == "__main__":
    sys.exit(main())
