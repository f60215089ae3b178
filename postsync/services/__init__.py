# Post lifecycle services
# Orchestrate domain logic with injected ports

from postsync.services.errors import (
    InvalidStatusError,
    NetworkError,
    NotFoundError,
    PostSyncError,
    RemoteDeleteError,
    RestoreError,
)
from postsync.services.post_repository import PostRepository

__all__ = [
    "PostRepository",
    # Errors
    "InvalidStatusError",
    "NetworkError",
    "NotFoundError",
    "PostSyncError",
    "RemoteDeleteError",
    "RestoreError",
]
