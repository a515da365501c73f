"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from dirkit.fs.context import IOContext
from dirkit.fs.host import HostFileSystem


@pytest.fixture
def context(tmp_path: Path) -> IOContext:
    """Local-mode context rooted at a temporary project directory."""
    return IOContext(project_root=tmp_path)


@pytest.fixture
def sandboxed_host() -> MagicMock:
    """Host double that records every call."""
    return MagicMock(spec=HostFileSystem)


@pytest.fixture
def sandboxed_context(tmp_path: Path, sandboxed_host: MagicMock) -> IOContext:
    """Context whose trust level forbids enumeration and mutation."""
    return IOContext(project_root=tmp_path, local_mode=False, host=sandboxed_host)


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """Project with a.txt, b.png and sub/c.txt."""
    (tmp_path / "a.txt").write_text("alpha")
    (tmp_path / "b.png").write_bytes(b"\x89PNG")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "c.txt").write_text("gamma")
    return tmp_path


@pytest.fixture
def xdg_dirs(tmp_path: Path) -> Iterator[dict[str, str]]:
    """Point the XDG config and state homes at temporary directories."""
    env = {
        "XDG_CONFIG_HOME": str(tmp_path / "xdg-config"),
        "XDG_STATE_HOME": str(tmp_path / "xdg-state"),
    }
    with patch.dict(os.environ, env):
        yield env
