"""Shared pytest fixtures for treesink tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Optional

import pytest

from treesink.config import Config
from treesink.sync.context import SyncContext
from treesink.sync.runlog import RunLog

# A value of None in a tree layout means "empty folder"
TreeLayout = Dict[str, Optional[str]]

START_TIME = "20240101T120000"


def _build_tree(root: Path, layout: TreeLayout) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    for rel_path, content in layout.items():
        path = root / rel_path
        if content is None:
            path.mkdir(parents=True, exist_ok=True)
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
    return root


def _user_entries(root: Path) -> set[str]:
    found = set()
    for path in root.rglob("*"):
        rel = path.relative_to(root).as_posix()
        top = rel.split("/")[0]
        if top.startswith("TREESINK_LOST_AND_FOUND_") or (
            top.startswith("treesink_") and top.endswith(".log")
        ):
            continue
        found.add(rel)
    return found


@pytest.fixture
def make_tree() -> Callable[[Path, TreeLayout], Path]:
    """Build a tree from a relpath -> content map (None for a folder)."""
    return _build_tree


@pytest.fixture
def user_entries() -> Callable[[Path], set]:
    """List a tree's relative paths, run artifacts excluded."""
    return _user_entries


@pytest.fixture
def source(tmp_path: Path) -> Path:
    path = tmp_path / "SOURCE"
    path.mkdir()
    return path


@pytest.fixture
def target(tmp_path: Path) -> Path:
    path = tmp_path / "TARGET"
    path.mkdir()
    return path


@pytest.fixture
def make_config(source: Path, target: Path) -> Callable[..., Config]:
    """Factory for a Config over the source/target fixtures.

    All phases are off unless switched on by keyword.
    """

    def _make(**overrides: Any) -> Config:
        values: Dict[str, Any] = {
            "source": source,
            "target": target,
            "move_folders": False,
            "sync_files": False,
            "delete": False,
            "keep_versions": True,
            "checksum": True,
            "start_time": START_TIME,
        }
        values.update(overrides)
        return Config(**values)

    return _make


@pytest.fixture
def foo_bar_baz() -> TreeLayout:
    """foo/{a,b,c}, bar/{d,e,f} and an empty baz/, as folders."""
    layout: TreeLayout = {"baz": None}
    for name in ("a", "b", "c"):
        layout[f"foo/{name}"] = None
    for name in ("d", "e", "f"):
        layout[f"bar/{name}"] = None
    return layout


@pytest.fixture
def make_context(make_config):
    """Factory for a SyncContext with an open run log.

    Keyword arguments go to ``make_config``.  Logs are closed on teardown.
    """
    opened: list[RunLog] = []

    def _make(**overrides: Any) -> SyncContext:
        config = make_config(**overrides)
        log = RunLog(config.log_file_path(), verbose=config.verbose)
        log.open()
        opened.append(log)
        return SyncContext.for_run(config, log)

    yield _make
    for log in opened:
        log.close()
