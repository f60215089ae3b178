from typing import Protocol

from postsync.domain.entities import PostKind, RemotePost


class RemotePostServicePort(Protocol):
    """
    Remote content service for a single site.

    Every method raises NetworkError on failure.
    """

    async def get_post(self, remote_id: int) -> RemotePost:
        ...

    async def get_posts(self, kind: PostKind, *, number: int) -> list[RemotePost]:
        ...

    async def create(self, post: RemotePost) -> RemotePost:
        ...

    async def update(self, post: RemotePost) -> RemotePost:
        ...

    async def trash(self, post: RemotePost) -> RemotePost:
        ...

    async def restore(self, post: RemotePost) -> RemotePost:
        ...

    async def delete(self, post: RemotePost) -> None:
        ...


class RemoteServiceFactoryPort(Protocol):
    def for_site(self, site_id: int) -> RemotePostServicePort:
        ...
