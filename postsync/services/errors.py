"""
Post sync error taxonomy.

NotFoundError and InvalidStatusError are local failures and are raised
before any remote call. NetworkError and its subtypes are remote failures;
they never undo local state that has already been committed.
"""

from __future__ import annotations

from uuid import UUID


class PostSyncError(Exception):
    """Base class for post lifecycle errors."""


class NotFoundError(PostSyncError):
    """Raised when a local post identifier does not resolve to a record."""

    def __init__(self, post_id: UUID) -> None:
        self.post_id = post_id
        super().__init__(f"Post {post_id} not found")


class InvalidStatusError(PostSyncError):
    """Raised when a post is not in the status an operation requires."""

    def __init__(self, post_id: UUID, status: str, expected: str) -> None:
        self.post_id = post_id
        self.status = status
        self.expected = expected
        super().__init__(f"Post {post_id} is '{status}', expected '{expected}'")


class NetworkError(PostSyncError):
    """Raised when a call to the remote content service fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class RemoteDeleteError(NetworkError):
    """Remote delete failed. The local chain is already gone."""


class RestoreError(NetworkError):
    """Remote restore failed. Local state was left untouched."""
