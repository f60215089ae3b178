from collections.abc import Callable
from typing import Protocol, TypeVar
from uuid import UUID

from postsync.domain.entities import Post, PostKind, PostStatus

T = TypeVar("T")


class PostStoreContextPort(Protocol):
    """
    View of the store handed to a perform_* block.

    All calls made through one context belong to the same transaction.
    """

    def existing_object(self, post_id: UUID) -> Post:
        """Get post by ID. Raises NotFoundError if missing."""
        ...

    def find_by_remote_id(self, site_id: int, remote_id: int) -> Post | None:
        """Get the original (non-revision) post synced under remote_id."""
        ...

    def save(self, post: Post) -> Post:
        """Insert or update a post."""
        ...

    def delete(self, post_id: UUID) -> None:
        """Delete a single record."""
        ...

    def revision_chain(self, post_id: UUID) -> list[Post]:
        """
        Every record sharing the root of post_id's chain.
        Root first, then descendants ordered by creation.
        """
        ...

    def list_posts(
        self,
        site_id: int,
        *,
        kind: PostKind | None = None,
        status: PostStatus | None = None,
    ) -> list[Post]:
        """List original posts of a site."""
        ...


class PostStorePort(Protocol):
    def perform_and_save(self, block: Callable[[PostStoreContextPort], T]) -> T:
        """Run block in a write transaction; commit on return, roll back on error."""
        ...

    def perform_query(self, block: Callable[[PostStoreContextPort], T]) -> T:
        """Run block against a read-only consistent view."""
        ...
