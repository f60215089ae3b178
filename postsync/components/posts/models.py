"""
Posts component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from postsync.domain.entities import Post, PostKind, PostStatus

# --- Errors ---


@dataclass(frozen=True)
class PostOperationError:
    """Post operation error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class GetPostInput:
    """Input for fetching a remote post into the local store."""

    site_id: int
    remote_id: int


@dataclass(frozen=True)
class SyncPostsInput:
    """Input for syncing a page of remote posts."""

    site_id: int
    kind: PostKind = "post"
    number: int | None = None


@dataclass(frozen=True)
class ListPostsInput:
    """Input for listing local posts."""

    site_id: int
    kind: PostKind | None = None
    status: PostStatus | None = None


@dataclass(frozen=True)
class DeletePostInput:
    post_id: UUID


@dataclass(frozen=True)
class TrashPostInput:
    post_id: UUID


@dataclass(frozen=True)
class RestorePostInput:
    post_id: UUID
    to_status: PostStatus = "publish"


@dataclass(frozen=True)
class UploadPostInput:
    post_id: UUID


# --- Output Models ---


@dataclass(frozen=True)
class PostOutput:
    """Output containing a single local post."""

    post: Post | None
    errors: list[PostOperationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class PostListOutput:
    """Output containing a list of local posts."""

    items: list[Post]
    errors: list[PostOperationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class PostOperationOutput:
    """Output for lifecycle operations (sync, delete, trash, restore, upload)."""

    post_ids: list[UUID] = field(default_factory=list)
    errors: list[PostOperationError] = field(default_factory=list)
    success: bool = True
