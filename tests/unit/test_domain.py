from datetime import UTC, datetime
from uuid import uuid4

from postsync.domain.entities import Post, RemotePost
from postsync.domain.state import (
    apply_remote,
    can_restore,
    kind_from_type_tag,
    make_revision,
    post_from_remote,
    status_from_remote,
    to_remote,
)

NOW = datetime(2025, 1, 1, tzinfo=UTC)


def test_kind_from_type_tag():
    assert kind_from_type_tag("page") == "page"
    assert kind_from_type_tag("post") == "post"
    assert kind_from_type_tag("attachment") == "post"
    assert kind_from_type_tag(None) == "post"


def test_status_from_remote_known_and_unknown(caplog):
    assert status_from_remote("publish") == "publish"
    assert status_from_remote("trash") == "trash"
    assert status_from_remote("inherit") == "draft"
    assert status_from_remote("inherit", fallback="pending") == "pending"
    assert "Unknown remote status" in caplog.text


def test_local_only():
    assert Post(site_id=1).is_local_only
    assert not Post(site_id=1, remote_id=3).is_local_only


def test_can_restore():
    assert can_restore(Post(site_id=1, status="trash"))
    assert not can_restore(Post(site_id=1, status="draft"))


def test_apply_remote_keeps_local_identity():
    post = Post(site_id=1, title="Old", revision_of=None)
    remote = RemotePost(
        site_id=1, remote_id=42, status="private", title="New", content="Body", type="page"
    )

    updated = apply_remote(post, remote, NOW)

    assert updated.id == post.id
    assert updated.created_at == post.created_at
    assert updated.remote_id == 42
    assert updated.status == "private"
    assert updated.title == "New"
    assert updated.content == "Body"
    assert updated.kind == "page"
    assert updated.updated_at == NOW
    # Original untouched
    assert post.title == "Old"


def test_apply_remote_without_remote_id_keeps_existing():
    post = Post(site_id=1, remote_id=5)
    updated = apply_remote(post, RemotePost(site_id=1, status="draft"), NOW)
    assert updated.remote_id == 5


def test_post_from_remote_is_new_record():
    remote = RemotePost(site_id=2, remote_id=1, status="publish", title="T", type="post")
    post = post_from_remote(remote, NOW)
    assert post.site_id == 2
    assert post.remote_id == 1
    assert post.created_at == NOW
    assert post.revision_of is None


def test_to_remote_overrides():
    post = Post(site_id=1, remote_id=None, status="trash", title="T", kind="page")

    remote = to_remote(post, remote_id=9, status="publish")

    assert remote.remote_id == 9
    assert remote.status == "publish"
    assert remote.type == "page"
    assert remote.title == "T"


def test_make_revision_chains_to_original():
    original = Post(id=uuid4(), site_id=1, remote_id=3, kind="page", title="Doc")

    revision = make_revision(original, NOW)

    assert revision.id != original.id
    assert revision.revision_of == original.id
    assert revision.remote_id == 3
    assert revision.kind == "page"
    assert revision.title == "Doc"
    assert revision.created_at == NOW
