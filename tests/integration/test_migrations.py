import sqlite3

import pytest

from postsync.adapters.sqlite.migrator import SQLiteMigrator


@pytest.fixture
def temp_db_path(tmp_path):
    return str(tmp_path / "test_db.sqlite")


def test_migrator_creates_migration_table(temp_db_path, migrations_dir):
    migrator = SQLiteMigrator(temp_db_path, migrations_dir)
    migrator.run_migrations()

    conn = sqlite3.connect(temp_db_path)
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='_migrations'"
    )
    assert cursor.fetchone() is not None
    conn.close()


def test_migrator_applies_posts_schema(temp_db_path, migrations_dir):
    migrator = SQLiteMigrator(temp_db_path, migrations_dir)
    applied = migrator.run_migrations()

    assert "001_posts.sql" in applied

    conn = sqlite3.connect(temp_db_path)
    cursor = conn.execute("SELECT name FROM sqlite_master WHERE type='table' AND name='posts'")
    assert cursor.fetchone() is not None

    cursor = conn.execute("SELECT filename FROM _migrations WHERE filename='001_posts.sql'")
    assert cursor.fetchone() is not None
    conn.close()


def test_migrator_is_idempotent(temp_db_path, migrations_dir):
    migrator = SQLiteMigrator(temp_db_path, migrations_dir)
    migrator.run_migrations()

    assert migrator.run_migrations() == []
    assert migrator.pending() == []


def test_down_section_is_not_applied(tmp_path, temp_db_path):
    migrations = tmp_path / "migrations"
    migrations.mkdir()
    (migrations / "001_things.sql").write_text(
        "-- Up\nCREATE TABLE things (id TEXT);\n-- Down\nDROP TABLE things;\n"
    )

    SQLiteMigrator(temp_db_path, migrations).run_migrations()

    conn = sqlite3.connect(temp_db_path)
    assert conn.execute("SELECT name FROM sqlite_master WHERE name='things'").fetchone()
    conn.close()


def test_broken_migration_raises(tmp_path, temp_db_path):
    migrations = tmp_path / "migrations"
    migrations.mkdir()
    (migrations / "001_broken.sql").write_text("CREATE TABLE (;")

    with pytest.raises(RuntimeError, match="001_broken.sql"):
        SQLiteMigrator(temp_db_path, migrations).run_migrations()


def test_missing_directory(tmp_path, temp_db_path):
    with pytest.raises(FileNotFoundError):
        SQLiteMigrator(temp_db_path, tmp_path / "absent").run_migrations()
