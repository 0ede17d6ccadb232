"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from epicat.storage import EpicStore, JSONFileStore


@pytest.fixture
def temp_epicat_dir(tmp_path: Path) -> Path:
    """Create a temporary .epicat directory for testing."""
    epicat_path = tmp_path / ".epicat"
    epicat_path.mkdir()
    return epicat_path


@pytest.fixture
def db_path(temp_epicat_dir: Path) -> Path:
    """Path of the database file inside the temporary directory."""
    return temp_epicat_dir / "db.json"


@pytest.fixture
def store(db_path: Path) -> EpicStore:
    """Create an EpicStore backed by an empty database file."""
    epic_store = EpicStore(JSONFileStore(db_path))
    epic_store.initialize()
    return epic_store
