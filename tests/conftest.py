from pathlib import Path

import pytest

from postsync.adapters.sqlite.migrator import SQLiteMigrator
from postsync.adapters.sqlite.post_store import SQLitePostStore

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def migrations_dir() -> Path:
    return PROJECT_ROOT / "migrations"


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "posts.db")


@pytest.fixture
def store(db_path, migrations_dir):
    """SQLite post store backed by a migrated temporary database."""
    SQLiteMigrator(db_path, migrations_dir).run_migrations()
    return SQLitePostStore(db_path)
