"""Canonicalization against the host filesystem."""

from __future__ import annotations

import os
import sys

import pytest

from lexpath import Path, PathNotFoundError, PathPermissionError, TooManyLinksError

pytestmark = pytest.mark.skipif(
    sys.platform.startswith("win"),
    reason="Symlink tests are Unix-focused.",
)


def test_plain_file(tmp_cwd):
    open("a", "w").close()
    assert Path("a").realpath() == tmp_cwd / "a"
    assert Path("./a").realpath() == tmp_cwd / "a"
    assert Path(str(tmp_cwd / "a")).realpath() == tmp_cwd / "a"


def test_base_dir(tmp_cwd):
    os.mkdir("sub")
    open("sub/a", "w").close()
    assert Path("a").realpath(tmp_cwd / "sub") == tmp_cwd / "sub/a"
    assert Path("a").realpath("sub") == tmp_cwd / "sub/a"


def test_relative_symlink(tmp_cwd):
    os.mkdir("d")
    os.symlink("d", "l")
    assert Path("l").realpath() == tmp_cwd / "d"
    assert Path("l/..").realpath() == tmp_cwd


def test_symlink_to_parent_directory(tmp_cwd):
    os.mkdir("d")
    os.symlink("../d", "d/e")
    assert Path("d/e/e/e").realpath() == tmp_cwd / "d"


def test_absolute_symlink(tmp_cwd):
    os.makedirs("x/y")
    os.symlink(str(tmp_cwd / "x"), "abs")
    assert Path("abs/y").realpath() == tmp_cwd / "x/y"


def test_agrees_with_os_realpath(tmp_cwd):
    os.makedirs("a/b/c")
    os.symlink("a/b", "ab")
    os.symlink("../../..", "a/b/c/up")
    for rel in ("ab/c", "ab/c/up", "ab/c/up/ab", "a/./b/../b/c"):
        assert str(Path(rel).realpath()) == os.path.realpath(rel)


def test_dangling_symlink(tmp_cwd):
    os.symlink("not-exist-target", "a")
    with pytest.raises(PathNotFoundError):
        Path("a").realpath()
    assert Path("a").realdirpath() == tmp_cwd / "not-exist-target"
    assert Path("a").exists()


@pytest.mark.parametrize(
    "links",
    [
        {"loop": "loop"},
        {"loop-a": "loop-b", "loop-b": "loop-a"},
        {"loop1": "loop1/loop1"},
    ],
)
def test_symlink_loops(tmp_cwd, links):
    for link, target in links.items():
        os.symlink(target, link)
    first = next(iter(links))
    with pytest.raises(TooManyLinksError):
        Path(first).realpath()
    with pytest.raises(TooManyLinksError):
        Path(first).realdirpath()


def test_realdirpath_missing_last_component(tmp_cwd):
    assert Path("new").realdirpath() == tmp_cwd / "new"
    with pytest.raises(PathNotFoundError):
        Path("new").realpath()
    with pytest.raises(PathNotFoundError):
        Path("missing/new").realdirpath()


def test_file_in_the_middle(tmp_cwd):
    open("f", "w").close()
    with pytest.raises(OSError):
        Path("f/x").realpath()
    assert not Path("f/x").exists()


@pytest.mark.skipif(hasattr(os, "geteuid") and os.geteuid() == 0, reason="root ignores permissions")
def test_unreadable_directory(tmp_cwd):
    os.makedirs("secret/inner")
    os.chmod("secret", 0)
    try:
        with pytest.raises(PathPermissionError):
            Path("secret/inner").realpath()
    finally:
        os.chmod("secret", 0o755)
