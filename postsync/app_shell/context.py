from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from postsync.adapters.clock import SystemClock
from postsync.adapters.remote.rest import RestServiceFactory
from postsync.adapters.sqlite.migrator import SQLiteMigrator
from postsync.adapters.sqlite.post_store import SQLitePostStore
from postsync.rules.models import Rules
from postsync.services.post_repository import PostRepository


@dataclass
class ServiceContext:
    repository: PostRepository
    store: SQLitePostStore
    remote_factory: RestServiceFactory
    migrator: SQLiteMigrator
    rules: Rules

    @classmethod
    def create(
        cls,
        rules: Rules,
        base_dir: Path,
        remote_factory: RestServiceFactory | None = None,
    ) -> ServiceContext:
        db_path = str(base_dir / rules.storage.db_path)
        migrator = SQLiteMigrator(db_path, base_dir / rules.storage.migrations_dir)
        store = SQLitePostStore(db_path)
        factory = remote_factory or RestServiceFactory.from_rules(rules.remote)

        repository = PostRepository(
            store,
            factory,
            SystemClock(),
            unknown_status_fallback=rules.posts.unknown_status_fallback,
            page_size=rules.remote.page_size,
        )
        return cls(
            repository=repository,
            store=store,
            remote_factory=factory,
            migrator=migrator,
            rules=rules,
        )

    async def aclose(self) -> None:
        await self.remote_factory.aclose()
