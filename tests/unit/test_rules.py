"""
Rules loading and validation tests.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from postsync.rules.loader import load_rules

PROJECT_ROOT = Path(__file__).parent.parent.parent


def write_rules(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "rules.yaml"
    path.write_text(content)
    return path


def test_project_rules_file_is_valid():
    rules = load_rules(PROJECT_ROOT / "rules.yaml")

    assert rules.project.slug == "post-lifecycle-sync"
    assert rules.remote.base_url.startswith("https://")
    assert rules.storage.migrations_dir == "migrations"
    assert rules.posts.unknown_status_fallback == "draft"


def test_defaults_fill_missing_sections(tmp_path):
    rules = load_rules(write_rules(tmp_path, "project:\n  slug: x\n  rules_version: '1'\n"))

    assert rules.remote.page_size == 100
    assert rules.remote.token_env == "WPCOM_AUTH_TOKEN"
    assert rules.logging.level == "INFO"
    assert rules.ops.required_env == []


def test_fenced_yaml_block(tmp_path):
    content = """# Rules

Some prose.

```yaml
project:
  slug: fenced
  rules_version: "2"
logging:
  level: debug
```
"""
    rules = load_rules(write_rules(tmp_path, content))

    assert rules.project.slug == "fenced"
    assert rules.logging.level == "DEBUG"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_rules(tmp_path / "nope.yaml")


def test_invalid_yaml(tmp_path):
    with pytest.raises(ValueError, match="Invalid YAML"):
        load_rules(write_rules(tmp_path, "project: [unclosed\n"))


def test_schema_violation(tmp_path):
    content = "project:\n  slug: x\n  rules_version: '1'\nremote:\n  page_size: 0\n"
    with pytest.raises(ValueError, match="Rules validation failed"):
        load_rules(write_rules(tmp_path, content))


def test_unknown_fallback_status_rejected(tmp_path):
    content = (
        "project:\n  slug: x\n  rules_version: '1'\n"
        "posts:\n  unknown_status_fallback: bogus\n"
    )
    with pytest.raises(ValueError):
        load_rules(write_rules(tmp_path, content))


def test_unknown_log_level_rejected(tmp_path):
    content = "project:\n  slug: x\n  rules_version: '1'\nlogging:\n  level: LOUD\n"
    with pytest.raises(ValueError):
        load_rules(write_rules(tmp_path, content))


def test_non_mapping_rejected(tmp_path):
    with pytest.raises(ValueError, match="mapping"):
        load_rules(write_rules(tmp_path, "- a\n- b\n"))
