"""Canonicalization against the in-memory filesystem."""

from __future__ import annotations

import errno

import pytest

from lexpath import (
    Canonicalizer,
    Path,
    PathNotFoundError,
    PathPermissionError,
    TooManyLinksError,
    realdirpath,
    realpath,
)


def test_plain_directories_resolve_to_themselves(fake_fs):
    fake_fs.mkdir("/a/b")
    assert realpath("/a/b", fs=fake_fs) == "/a/b"
    assert realpath("/a/./b/../b", fs=fake_fs) == "/a/b"


def test_relative_link_resolves_from_its_parent(fake_fs):
    fake_fs.mkdir("/a/b")
    fake_fs.symlink("/l", "a/b")
    assert realpath("/l", fs=fake_fs) == "/a/b"


def test_absolute_link_restarts_from_root(fake_fs):
    fake_fs.mkdir("/a/b")
    fake_fs.symlink("/x/l", "/a")
    assert realpath("/x/l/b", fs=fake_fs) == "/a/b"


def test_parent_after_link_is_physical(fake_fs):
    fake_fs.mkdir("/b/c")
    fake_fs.symlink("/a/l", "/b/c")
    assert realpath("/a/l/..", fs=fake_fs) == "/b"
    assert Path("/a/l/..").cleanpath() == Path("/a")


def test_parent_of_root_is_root(fake_fs):
    fake_fs.mkdir("/work")
    assert realpath("/../work", fs=fake_fs) == "/work"
    assert realpath("/..", fs=fake_fs) == "/"


def test_relative_input_uses_working_directory(fake_fs):
    fake_fs.mkdir("/work/x")
    assert realpath("x", fs=fake_fs) == "/work/x"
    assert realpath(".", fs=fake_fs) == "/work"


def test_base_dir_anchors_relative_input(fake_fs):
    fake_fs.mkdir("/a/b")
    fake_fs.mkdir("/work/a/b")
    assert realpath("b", "/a", fs=fake_fs) == "/a/b"
    assert realpath("b", "a", fs=fake_fs) == "/work/a/b"
    assert realpath("/a/b", "/elsewhere", fs=fake_fs) == "/a/b"


def test_repeated_link_through_parent_is_not_a_loop(fake_fs):
    fake_fs.mkdir("/work/c/d")
    fake_fs.symlink("/work/c/d/e", "../../c")
    assert realpath("/work/c/d/e/d/e", fs=fake_fs) == "/work/c"


@pytest.mark.parametrize(
    "links,path",
    [
        ({"/work/loop": "loop"}, "/work/loop"),
        ({"/work/a1": "a2", "/work/a2": "a1"}, "/work/a1"),
        ({"/work/loop1": "loop1/loop1"}, "/work/loop1"),
        ({"/work/loop2": "/work/loop2/x"}, "/work/loop2"),
    ],
)
def test_symlink_cycles_raise_eloop(fake_fs, links, path):
    fake_fs.mkdir("/work")
    for link, target in links.items():
        fake_fs.symlink(link, target)
    with pytest.raises(TooManyLinksError) as exc:
        realpath(path, fs=fake_fs)
    assert exc.value.errno == errno.ELOOP
    with pytest.raises(OSError):
        realdirpath(path, fs=fake_fs)


def test_long_chain_exceeds_link_bound(fake_fs):
    fake_fs.mkdir("/target")
    fake_fs.symlink("/l1", "l2").symlink("/l2", "l3").symlink("/l3", "l4").symlink("/l4", "target")

    assert Canonicalizer(fake_fs, max_links=4).resolve("/l1") == "/target"
    with pytest.raises(TooManyLinksError):
        Canonicalizer(fake_fs, max_links=3).resolve("/l1")


def test_canonicalizer_instance_is_reusable(fake_fs):
    fake_fs.mkdir("/target")
    fake_fs.symlink("/l1", "l2").symlink("/l2", "target")
    canon = Canonicalizer(fake_fs, max_links=2)
    assert canon.resolve("/l1") == "/target"
    assert canon.resolve("/l1") == "/target"


def test_each_prefix_is_inspected_once(fake_fs):
    fake_fs.mkdir("/a/b")
    fake_fs.symlink("/a/l", "b")
    assert realpath("/a/l/../l/../l", fs=fake_fs) == "/a/b"
    assert fake_fs.lstat_calls.count("/a/l") == 1


def test_missing_component(fake_fs):
    fake_fs.mkdir("/d")
    with pytest.raises(PathNotFoundError) as exc:
        realpath("/d/new", fs=fake_fs)
    assert exc.value.errno == errno.ENOENT
    assert exc.value.filename == "/d/new"
    assert isinstance(exc.value, FileNotFoundError)


def test_realdirpath_tolerates_missing_last_component(fake_fs):
    fake_fs.mkdir("/d")
    assert realdirpath("/d/new", fs=fake_fs) == "/d/new"
    assert realdirpath("/d/./new", fs=fake_fs) == "/d/new"


def test_realdirpath_rejects_missing_intermediate(fake_fs):
    with pytest.raises(PathNotFoundError):
        realdirpath("/nope/new", fs=fake_fs)


def test_realdirpath_follows_dangling_final_link(fake_fs):
    fake_fs.mkdir("/d")
    fake_fs.symlink("/d/dangling", "missing")
    assert realdirpath("/d/dangling", fs=fake_fs) == "/d/missing"
    with pytest.raises(PathNotFoundError):
        realpath("/d/dangling", fs=fake_fs)


def test_dangling_link_in_the_middle_fails(fake_fs):
    fake_fs.mkdir("/d")
    fake_fs.symlink("/d/dangling", "missing")
    with pytest.raises(PathNotFoundError):
        realdirpath("/d/dangling/x", fs=fake_fs)


def test_permission_denied(fake_fs):
    fake_fs.mkdir("/secret/inner")
    fake_fs.deny("/secret")
    assert realpath("/secret", fs=fake_fs) == "/secret"
    with pytest.raises(PathPermissionError) as exc:
        realpath("/secret/inner", fs=fake_fs)
    assert isinstance(exc.value, PermissionError)
    assert exc.value.errno == errno.EACCES
    with pytest.raises(PathPermissionError):
        realdirpath("/secret/new", fs=fake_fs)


def test_unexpected_os_errors_propagate(fake_fs):
    fake_fs.mkdir("/work/x")
    fake_fs.errors["/work"] = OSError(errno.EIO, "Input/output error", "/work")
    with pytest.raises(OSError) as exc:
        realpath("/work/x", fs=fake_fs)
    assert exc.value.errno == errno.EIO


class TestPathFilesystemMethods:
    def test_realpath_returns_path(self, fake_fs):
        fake_fs.mkdir("/a/b")
        fake_fs.symlink("/l", "a")
        result = Path("/l/b").realpath(fs=fake_fs)
        assert isinstance(result, Path)
        assert result == Path("/a/b")
        assert Path("b").realpath(Path("/a"), fs=fake_fs) == Path("/a/b")
        assert Path("/l/new").realdirpath(fs=fake_fs) == Path("/a/new")

    def test_exists_does_not_follow_links(self, fake_fs):
        fake_fs.symlink("/dangling", "/nowhere")
        assert Path("/dangling").exists(fake_fs)
        assert not Path("/nowhere").exists(fake_fs)

    def test_readlink(self, fake_fs):
        fake_fs.symlink("/dangling", "/nowhere")
        assert Path("/dangling").readlink(fake_fs) == Path("/nowhere")
        fake_fs.touch("/file")
        with pytest.raises(OSError):
            Path("/file").readlink(fake_fs)

    def test_cwd_and_home(self, fake_fs):
        assert Path.cwd(fake_fs) == Path("/work")
        assert Path.home(fake_fs) == Path("/home/user")

    def test_expand(self, fake_fs):
        assert Path("~").expand(fs=fake_fs) == Path("/home/user")
        assert Path("~/x/../y").expand(fs=fake_fs) == Path("/home/user/y")
        assert Path("a/../b").expand(fs=fake_fs) == Path("/work/b")
        assert Path("x").expand("sub", fs=fake_fs) == Path("/work/sub/x")
        assert Path("x").expand("/base", fs=fake_fs) == Path("/base/x")
        assert Path("/abs/.").expand(fs=fake_fs) == Path("/abs")
        assert Path("~user/x").expand(fs=fake_fs) == Path("/work/~user/x")

    def test_backfind(self, fake_fs):
        fake_fs.mkdir("/proj/.git")
        fake_fs.mkdir("/proj/src/pkg")
        fake_fs.touch("/proj/lib/.keep")
        start = Path("/proj/src/pkg")
        assert start.backfind(".git", fake_fs) == Path("/proj/.git")
        assert start.backfind("lib[.keep]", fake_fs) == Path("/proj/lib")
        assert start.backfind("lib[.missing]", fake_fs) is None
        assert start.backfind("nothing-here", fake_fs) is None
