"""
Posts component - post lifecycle against the remote content service.
"""

from .component import (
    PostInput,
    run,
    run_delete,
    run_get,
    run_list,
    run_restore,
    run_sync,
    run_trash,
    run_upload,
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

__all__ = [
    # Entry points
    "PostInput",
    "run",
    "run_delete",
    "run_get",
    "run_list",
    "run_restore",
    "run_sync",
    "run_trash",
    "run_upload",
    # Input models
    "DeletePostInput",
    "GetPostInput",
    "ListPostsInput",
    "RestorePostInput",
    "SyncPostsInput",
    "TrashPostInput",
    "UploadPostInput",
    # Output models
    "PostListOutput",
    "PostOperationError",
    "PostOperationOutput",
    "PostOutput",
    # Ports
    "PostRepositoryPort",
]
