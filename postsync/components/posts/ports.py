"""
Posts component port definitions.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from postsync.domain.entities import Post, PostKind, PostStatus


class PostRepositoryPort(Protocol):
    """Lifecycle operations the component drives."""

    async def get_post(self, remote_id: int, site_id: int) -> UUID:
        ...

    async def sync_posts(
        self, site_id: int, kind: PostKind = "post", number: int | None = None
    ) -> list[UUID]:
        ...

    async def delete(self, post_id: UUID) -> None:
        ...

    async def trash(self, post_id: UUID) -> None:
        ...

    async def restore(self, post_id: UUID, to: PostStatus = "publish") -> None:
        ...

    async def upload(self, post_id: UUID) -> UUID:
        ...

    def get_local(self, post_id: UUID) -> Post:
        ...

    def list_posts(
        self,
        site_id: int,
        *,
        kind: PostKind | None = None,
        status: PostStatus | None = None,
    ) -> list[Post]:
        ...
