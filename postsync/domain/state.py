import logging
from datetime import datetime
from typing import Any, cast
from uuid import uuid4

from postsync.domain.entities import POST_STATUSES, Post, PostKind, PostStatus, RemotePost

logger = logging.getLogger(__name__)


def kind_from_type_tag(tag: str | None) -> PostKind:
    """Resolve the remote `type` tag once, at ingestion time."""
    if tag == "page":
        return "page"
    return "post"


def status_from_remote(value: str | None, fallback: PostStatus = "draft") -> PostStatus:
    """
    Map a remote status string onto a known PostStatus.

    Unknown values (custom statuses registered by plugins, for example)
    are stored as the fallback.
    """
    if value in POST_STATUSES:
        return cast(PostStatus, value)
    logger.warning("Unknown remote status %r, storing as %r", value, fallback)
    return fallback


def can_restore(post: Post) -> bool:
    return post.status == "trash"


def apply_remote(
    post: Post,
    remote: RemotePost,
    now: datetime,
    fallback_status: PostStatus = "draft",
) -> Post:
    """
    Return a NEW Post carrying the server's view of the document.
    The local identity (id, revision_of, created_at) is kept.
    """
    updates: dict[str, Any] = {
        "site_id": remote.site_id,
        "status": status_from_remote(remote.status, fallback_status),
        "title": remote.title,
        "content": remote.content,
        "kind": kind_from_type_tag(remote.type),
        "updated_at": now,
    }
    if remote.remote_id is not None:
        updates["remote_id"] = remote.remote_id
    if remote.date_modified is not None:
        updates["date_modified"] = remote.date_modified

    return post.model_copy(update=updates)


def post_from_remote(
    remote: RemotePost, now: datetime, fallback_status: PostStatus = "draft"
) -> Post:
    return apply_remote(
        Post(site_id=remote.site_id, created_at=now, updated_at=now),
        remote,
        now,
        fallback_status,
    )


def to_remote(post: Post, *, remote_id: int | None = None, status: str | None = None) -> RemotePost:
    """Build the wire representation of a local post."""
    return RemotePost(
        site_id=post.site_id,
        remote_id=remote_id if remote_id is not None else post.remote_id,
        status=status or post.status,
        title=post.title,
        content=post.content,
        type=post.kind,
        date_modified=post.date_modified,
    )


def make_revision(post: Post, now: datetime) -> Post:
    """
    Return a new record chained to `post`.
    Revisions share the document's remote identity and kind.
    """
    return post.model_copy(
        update={
            "id": uuid4(),
            "revision_of": post.id,
            "created_at": now,
            "updated_at": now,
        }
    )
