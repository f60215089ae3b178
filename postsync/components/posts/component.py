"""
Posts component - result-style entry points over the post repository.

Expected failures never raise out of this module: each entry point returns
an output object whose `errors` list carries a stable code.

Error codes:
- not_found: local post id does not resolve
- invalid_status: post is not in the status the operation requires
- network_error: remote call failed, nothing was written locally
- remote_delete_failed: chain deleted locally, remote delete failed
- restore_failed: remote restore failed, post left in the trash
- sync_error: any other post sync failure
"""

from __future__ import annotations

import logging
from uuid import UUID

from postsync.services.errors import (
    InvalidStatusError,
    NetworkError,
    NotFoundError,
    PostSyncError,
    RemoteDeleteError,
    RestoreError,
)

from .models import (
    DeletePostInput,
    GetPostInput,
    ListPostsInput,
    PostListOutput,
    PostOperationError,
    PostOperationOutput,
    PostOutput,
    RestorePostInput,
    SyncPostsInput,
    TrashPostInput,
    UploadPostInput,
)
from .ports import PostRepositoryPort

logger = logging.getLogger(__name__)

# Type alias for all supported inputs
PostInput = (
    GetPostInput
    | SyncPostsInput
    | ListPostsInput
    | DeletePostInput
    | TrashPostInput
    | RestorePostInput
    | UploadPostInput
)


def _error_from(exc: PostSyncError) -> PostOperationError:
    """Map a repository exception onto an operation error."""
    if isinstance(exc, NotFoundError):
        return PostOperationError(code="not_found", message=str(exc), field="post_id")
    if isinstance(exc, InvalidStatusError):
        return PostOperationError(code="invalid_status", message=str(exc), field="status")
    if isinstance(exc, RemoteDeleteError):
        return PostOperationError(code="remote_delete_failed", message=str(exc))
    if isinstance(exc, RestoreError):
        return PostOperationError(code="restore_failed", message=str(exc))
    if isinstance(exc, NetworkError):
        return PostOperationError(code="network_error", message=str(exc))
    return PostOperationError(code="sync_error", message=str(exc))


def _failed(exc: PostSyncError, post_ids: list[UUID] | None = None) -> PostOperationOutput:
    logger.debug("Post operation failed: %s", exc)
    return PostOperationOutput(post_ids=post_ids or [], errors=[_error_from(exc)], success=False)


# --- Component Entry Points ---


async def run_get(inp: GetPostInput, *, repo: PostRepositoryPort) -> PostOutput:
    """
    Fetch a remote post into the local store.

    Args:
        inp: Input containing site_id and remote_id.
        repo: Post repository port.

    Returns:
        PostOutput with the persisted post or errors.
    """
    try:
        post_id = await repo.get_post(inp.remote_id, inp.site_id)
        post = repo.get_local(post_id)
    except PostSyncError as e:
        return PostOutput(post=None, errors=[_error_from(e)], success=False)

    return PostOutput(post=post, errors=[], success=True)


async def run_sync(inp: SyncPostsInput, *, repo: PostRepositoryPort) -> PostOperationOutput:
    try:
        post_ids = await repo.sync_posts(inp.site_id, inp.kind, inp.number)
    except PostSyncError as e:
        return _failed(e)

    return PostOperationOutput(post_ids=post_ids, errors=[], success=True)


async def run_list(inp: ListPostsInput, *, repo: PostRepositoryPort) -> PostListOutput:
    items = repo.list_posts(inp.site_id, kind=inp.kind, status=inp.status)
    return PostListOutput(items=items, errors=[], success=True)


async def run_delete(inp: DeletePostInput, *, repo: PostRepositoryPort) -> PostOperationOutput:
    """
    Delete a post and its whole revision chain.

    A remote_delete_failed error still means the post is gone locally.
    """
    try:
        await repo.delete(inp.post_id)
    except PostSyncError as e:
        return _failed(e, post_ids=[inp.post_id])

    return PostOperationOutput(post_ids=[inp.post_id], errors=[], success=True)


async def run_trash(inp: TrashPostInput, *, repo: PostRepositoryPort) -> PostOperationOutput:
    try:
        await repo.trash(inp.post_id)
    except PostSyncError as e:
        return _failed(e, post_ids=[inp.post_id])

    return PostOperationOutput(post_ids=[inp.post_id], errors=[], success=True)


async def run_restore(inp: RestorePostInput, *, repo: PostRepositoryPort) -> PostOperationOutput:
    if inp.to_status == "trash":
        return PostOperationOutput(
            post_ids=[inp.post_id],
            errors=[
                PostOperationError(
                    code="invalid_status",
                    message="Cannot restore a post to 'trash'",
                    field="to_status",
                )
            ],
            success=False,
        )

    try:
        await repo.restore(inp.post_id, to=inp.to_status)
    except PostSyncError as e:
        return _failed(e, post_ids=[inp.post_id])

    return PostOperationOutput(post_ids=[inp.post_id], errors=[], success=True)


async def run_upload(inp: UploadPostInput, *, repo: PostRepositoryPort) -> PostOperationOutput:
    try:
        uploaded_id = await repo.upload(inp.post_id)
    except PostSyncError as e:
        return _failed(e, post_ids=[inp.post_id])

    return PostOperationOutput(post_ids=[uploaded_id], errors=[], success=True)


async def run(
    inp: PostInput,
    *,
    repo: PostRepositoryPort,
) -> PostOutput | PostListOutput | PostOperationOutput:
    """
    Main entry point for the posts component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, GetPostInput):
        return await run_get(inp, repo=repo)

    elif isinstance(inp, SyncPostsInput):
        return await run_sync(inp, repo=repo)

    elif isinstance(inp, ListPostsInput):
        return await run_list(inp, repo=repo)

    elif isinstance(inp, DeletePostInput):
        return await run_delete(inp, repo=repo)

    elif isinstance(inp, TrashPostInput):
        return await run_trash(inp, repo=repo)

    elif isinstance(inp, RestorePostInput):
        return await run_restore(inp, repo=repo)

    elif isinstance(inp, UploadPostInput):
        return await run_upload(inp, repo=repo)

    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
