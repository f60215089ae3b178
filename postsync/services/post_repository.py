"""
Post lifecycle repository.

Mediates between the local post store and the remote content service.
Local state is always left consistent, whatever the network does:

- delete is local first; a remote failure is reported after the chain is gone
- trash always succeeds locally; the remote call only imports server changes
- restore only changes local state when the remote call succeeds

Posts without a remote_id never reach the network.
"""

from __future__ import annotations

import logging
from uuid import UUID

from postsync.adapters.clock import SystemClock
from postsync.domain.entities import Post, PostKind, PostStatus, RemotePost
from postsync.domain.state import (
    apply_remote,
    can_restore,
    make_revision,
    post_from_remote,
    to_remote,
)
from postsync.ports.clock import ClockPort
from postsync.ports.remote import RemotePostServicePort, RemoteServiceFactoryPort
from postsync.ports.store import PostStoreContextPort, PostStorePort
from postsync.services.errors import (
    InvalidStatusError,
    NetworkError,
    RemoteDeleteError,
    RestoreError,
)

logger = logging.getLogger(__name__)


class PostRepository:
    """
    Post lifecycle operations over a store and a per-site remote factory.

    Store blocks are plain synchronous sqlite3 calls made between awaits, so
    they block the running event loop for their duration.
    """

    def __init__(
        self,
        store: PostStorePort,
        remote_factory: RemoteServiceFactoryPort,
        clock: ClockPort | None = None,
        *,
        unknown_status_fallback: PostStatus = "draft",
        page_size: int = 100,
    ):
        self.store = store
        self.remote_factory = remote_factory
        self.clock = clock or SystemClock()
        self.unknown_status_fallback = unknown_status_fallback
        self.page_size = page_size

    def _remote_for(self, site_id: int) -> RemotePostServicePort:
        return self.remote_factory.for_site(site_id)

    def _upsert(self, ctx: PostStoreContextPort, remote: RemotePost) -> Post:
        now = self.clock.now()
        existing = None
        if remote.remote_id is not None:
            existing = ctx.find_by_remote_id(remote.site_id, remote.remote_id)

        if existing:
            post = apply_remote(existing, remote, now, self.unknown_status_fallback)
        else:
            post = post_from_remote(remote, now, self.unknown_status_fallback)
        return ctx.save(post)

    def _root(self, post_id: UUID) -> Post:
        return self.store.perform_query(lambda ctx: ctx.revision_chain(post_id)[0])

    def _set_status(self, post_id: UUID, status: PostStatus) -> None:
        now = self.clock.now()

        def update(ctx: PostStoreContextPort) -> None:
            post = ctx.existing_object(post_id)
            ctx.save(post.model_copy(update={"status": status, "updated_at": now}))

        self.store.perform_and_save(update)

    def _delete_chain(self, post_id: UUID) -> Post:
        def delete_chain(ctx: PostStoreContextPort) -> tuple[Post, int]:
            chain = ctx.revision_chain(post_id)
            # Children before parents
            for post in reversed(chain):
                ctx.delete(post.id)
            return chain[0], len(chain)

        root, count = self.store.perform_and_save(delete_chain)
        logger.info("Deleted post %s locally (%d record(s) in chain)", root.id, count)
        return root

    def _apply_remote(self, post_id: UUID, remote: RemotePost) -> None:
        now = self.clock.now()

        def update(ctx: PostStoreContextPort) -> None:
            post = ctx.existing_object(post_id)
            ctx.save(apply_remote(post, remote, now, self.unknown_status_fallback))

        self.store.perform_and_save(update)

    # --- Fetch ---

    async def get_post(self, remote_id: int, site_id: int) -> UUID:
        """
        Fetch a post from the remote and persist it locally.

        Returns the local id of the inserted or updated record.
        Raises NetworkError; nothing is written in that case.
        """
        remote = await self._remote_for(site_id).get_post(remote_id)
        if remote.remote_id is None:
            remote = remote.model_copy(update={"remote_id": remote_id})

        return self.store.perform_and_save(lambda ctx: self._upsert(ctx, remote).id)

    async def sync_posts(
        self, site_id: int, kind: PostKind = "post", number: int | None = None
    ) -> list[UUID]:
        """Fetch one page of remote posts of a kind and upsert them in one transaction."""
        remotes = await self._remote_for(site_id).get_posts(kind, number=number or self.page_size)

        def persist(ctx: PostStoreContextPort) -> list[UUID]:
            return [self._upsert(ctx, r).id for r in remotes if r.remote_id is not None]

        post_ids = self.store.perform_and_save(persist)
        logger.info("Synced %d %s(s) for site %s", len(post_ids), kind, site_id)
        return post_ids

    # --- Lifecycle ---

    async def delete(self, post_id: UUID) -> None:
        """
        Delete the whole revision chain containing post_id.

        Local deletion always happens first and commits as one transaction.
        Raises RemoteDeleteError afterwards if the remote delete fails.
        """

        root = self._delete_chain(post_id)

        if root.is_local_only:
            return

        try:
            await self._remote_for(root.site_id).delete(to_remote(root))
        except NetworkError as e:
            raise RemoteDeleteError(
                f"Post {root.id} was deleted locally but the remote delete failed: {e}",
                status_code=e.status_code,
            ) from e

    async def trash(self, post_id: UUID) -> None:
        """
        Move a post to the trash. A post already in the trash is deleted.

        Never fails because of the network: if the remote call fails the
        post is still trashed locally. A reply reporting the post as
        deleted drops the local chain.
        """
        post = self._root(post_id)

        if post.status == "trash":
            try:
                await self.delete(post.id)
            except RemoteDeleteError as e:
                logger.warning("Trashed post %s removed locally only: %s", post.id, e)
            return

        if post.is_local_only:
            self._set_status(post.id, "trash")
            return

        try:
            remote = await self._remote_for(post.site_id).trash(to_remote(post))
        except NetworkError as e:
            logger.warning("Remote trash failed for post %s, trashing locally: %s", post.id, e)
            self._set_status(post.id, "trash")
            return

        if remote.status == "deleted":
            # Already trashed on the server, so the call removed it for good
            logger.info("Post %s was deleted remotely while trashing", post.id)
            self._delete_chain(post.id)
            return

        self._apply_remote(post.id, remote)

    async def restore(self, post_id: UUID, to: PostStatus = "publish") -> None:
        """
        Move a trashed post back to `to`.

        The server decides the resulting status; it may differ from `to`.
        Raises RestoreError on remote failure, leaving the post in the trash.
        """
        if to == "trash":
            raise ValueError("Cannot restore a post to 'trash'")

        post = self._root(post_id)
        if not can_restore(post):
            raise InvalidStatusError(post.id, post.status, "trash")

        if post.is_local_only:
            self._set_status(post.id, to)
            return

        try:
            # Requested status only; the WordPress.com restore endpoint takes no body
            remote = await self._remote_for(post.site_id).restore(to_remote(post, status=to))
        except NetworkError as e:
            raise RestoreError(
                f"Could not restore post {post.id}: {e}", status_code=e.status_code
            ) from e

        self._apply_remote(post.id, remote)

    # --- Local edits ---

    def create_revision(self, post_id: UUID) -> UUID:
        """Chain a new editable revision onto the latest record of the chain."""
        now = self.clock.now()

        def create(ctx: PostStoreContextPort) -> UUID:
            latest = ctx.revision_chain(post_id)[-1]
            return ctx.save(make_revision(latest, now)).id

        return self.store.perform_and_save(create)

    def update_local(
        self,
        post_id: UUID,
        *,
        title: str | None = None,
        content: str | None = None,
        status: PostStatus | None = None,
    ) -> None:
        updates: dict[str, object] = {"updated_at": self.clock.now()}
        if title is not None:
            updates["title"] = title
        if content is not None:
            updates["content"] = content
        if status is not None:
            updates["status"] = status

        def update(ctx: PostStoreContextPort) -> None:
            post = ctx.existing_object(post_id)
            ctx.save(post.model_copy(update=updates))

        self.store.perform_and_save(update)

    async def upload(self, post_id: UUID) -> UUID:
        """
        Push the newest revision of the chain to the remote.

        Creates the remote post when the chain is local-only, updates it
        otherwise. On success the original absorbs the server response and
        the revisions are dropped. Returns the original's id.

        If the created remote post is already stored under another local
        root (a sync imported it after an earlier create went unanswered),
        that root absorbs the response instead, the uploaded chain is
        dropped, and its id is returned.
        """
        chain = self.store.perform_query(lambda ctx: ctx.revision_chain(post_id))
        root, latest = chain[0], chain[-1]

        service = self._remote_for(root.site_id)
        payload = to_remote(latest, remote_id=root.remote_id)
        if root.is_local_only:
            remote = await service.create(payload)
        else:
            remote = await service.update(payload)

        now = self.clock.now()

        def absorb(ctx: PostStoreContextPort) -> UUID:
            current = ctx.revision_chain(root.id)
            target = current[0]
            existing = None
            if remote.remote_id is not None:
                existing = ctx.find_by_remote_id(target.site_id, remote.remote_id)

            if existing and existing.id != target.id:
                logger.warning(
                    "Remote post %s is already stored as %s, merging upload of %s",
                    remote.remote_id,
                    existing.id,
                    target.id,
                )
                for record in reversed(current):
                    ctx.delete(record.id)
                target = existing
            else:
                for revision in reversed(current[1:]):
                    ctx.delete(revision.id)
            return ctx.save(apply_remote(target, remote, now, self.unknown_status_fallback)).id

        uploaded_id = self.store.perform_and_save(absorb)
        logger.info("Uploaded post %s as remote post %s", uploaded_id, remote.remote_id)
        return uploaded_id

    # --- Queries ---

    def get_local(self, post_id: UUID) -> Post:
        return self.store.perform_query(lambda ctx: ctx.existing_object(post_id))

    def list_posts(
        self,
        site_id: int,
        *,
        kind: PostKind | None = None,
        status: PostStatus | None = None,
    ) -> list[Post]:
        return self.store.perform_query(
            lambda ctx: ctx.list_posts(site_id, kind=kind, status=status)
        )
