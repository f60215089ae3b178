"""
CLI tests against a temporary database.

Only local-only posts are driven through the lifecycle commands here, so no
request ever reaches the remote service.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from postsync.adapters.sqlite.post_store import SQLitePostStore
from postsync.app_shell.cli import main
from postsync.domain.entities import Post

PROJECT_ROOT = Path(__file__).parent.parent.parent


@pytest.fixture
def rules_path(tmp_path, monkeypatch) -> Path:
    monkeypatch.delenv("WPCOM_AUTH_TOKEN", raising=False)
    path = tmp_path / "rules.yaml"
    path.write_text(
        f"""
project:
  slug: cli-test
  rules_version: "1"
storage:
  db_path: posts.db
  migrations_dir: "{(PROJECT_ROOT / 'migrations').as_posix()}"
logging:
  level: WARNING
"""
    )
    return path


def cli(rules_path: Path, *args: str) -> int:
    return main(["--rules", str(rules_path), *args])


def local_post(rules_path: Path, **fields) -> tuple[SQLitePostStore, Post]:
    store = SQLitePostStore(str(rules_path.parent / "posts.db"))
    post = store.perform_and_save(lambda ctx: ctx.save(Post(site_id=1, **fields)))
    return store, post


def load(store: SQLitePostStore, post: Post) -> Post:
    return store.perform_query(lambda ctx: ctx.existing_object(post.id))


def test_migrate_creates_database(rules_path, capsys):
    assert cli(rules_path, "migrate") == 0

    assert (rules_path.parent / "posts.db").exists()
    assert "All migrations applied." in capsys.readouterr().out


def test_list_empty(rules_path, capsys):
    assert cli(rules_path, "list", "1") == 0

    assert "0 post(s)." in capsys.readouterr().out


def test_local_lifecycle(rules_path, capsys):
    cli(rules_path, "migrate")
    store, post = local_post(rules_path, title="Draft idea", status="draft")

    assert cli(rules_path, "trash", str(post.id)) == 0
    assert load(store, post).status == "trash"

    assert cli(rules_path, "list", "1", "--status", "trash") == 0
    assert "Draft idea" in capsys.readouterr().out

    assert cli(rules_path, "restore", str(post.id), "--to", "private") == 0
    assert load(store, post).status == "private"

    assert cli(rules_path, "delete", str(post.id)) == 0
    assert store.perform_query(lambda ctx: ctx.list_posts(1)) == []


def test_restore_live_post_fails(rules_path, capsys):
    cli(rules_path, "migrate")
    _, post = local_post(rules_path, status="draft")

    assert cli(rules_path, "restore", str(post.id)) == 1
    assert "invalid_status" in capsys.readouterr().err


def test_unknown_post_reports_not_found(rules_path, capsys):
    assert cli(rules_path, "trash", "00000000-0000-0000-0000-000000000000") == 1
    assert "not_found" in capsys.readouterr().err


def test_restore_to_trash_is_not_a_choice(rules_path):
    with pytest.raises(SystemExit) as exc_info:
        cli(rules_path, "restore", "00000000-0000-0000-0000-000000000000", "--to", "trash")
    assert exc_info.value.code == 2


def test_missing_rules_file(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        main(["--rules", str(tmp_path / "absent.yaml"), "list", "1"])
    assert exc_info.value.code == 1
