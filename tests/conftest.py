# tests/conftest.py
# Shared fixtures: an in-memory filesystem and a real temporary working directory.

from __future__ import annotations

import os
import pathlib

import pytest

from lexpath import Path
from tests.fakes.fake_fs import FakeFileSystem


@pytest.fixture()
def fake_fs() -> FakeFileSystem:
    return FakeFileSystem(cwd="/work")


@pytest.fixture()
def tmp_cwd(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Canonical temporary directory that is also the working directory."""
    real = Path(os.path.realpath(tmp_path))
    monkeypatch.chdir(os.fspath(real))
    return real
