"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_STATDATA_ENV_VARS = (
    "STATDATA_SERIALIZER",
    "STATDATA_COMPRESS",
    "STATDATA_DELIMITER",
    "STATDATA_LOG_LEVEL",
)


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _clean_statdata_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment settings out of test runs."""
    for variable in _STATDATA_ENV_VARS:
        monkeypatch.delenv(variable, raising=False)


@pytest.fixture
def labelled_store():
    """Store holding two labeled sequences and nothing else."""
    from store.sequence_store import SequenceStore

    store = SequenceStore()
    store.load({"aname": [1, 2, 3], "anothername": ["a", "b"]})
    return store
