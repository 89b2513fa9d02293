# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskforge.store import TaskStore

# 2024-06-15 12:00:00 UTC; tests only compare offsets from it.
NOW = 1718452800


@pytest.fixture()
def now() -> int:
    return NOW


@pytest.fixture()
def store(tmp_path: Path) -> TaskStore:
    return TaskStore(tmp_path / "tasks.json")
