"""
SQLite post store.

Every perform_* call opens its own connection and runs the block inside a
single transaction, so a multi-record change (deleting a revision chain,
applying an upload) either commits as a whole or not at all.

Revision chains are resolved with recursive queries over the
`revision_of` column rather than by walking loaded records.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar
from uuid import UUID

from postsync.domain.entities import Post, PostKind, PostStatus
from postsync.services.errors import NotFoundError

T = TypeVar("T")

_ROOT_QUERY = """
    WITH RECURSIVE ancestors(id, revision_of) AS (
        SELECT id, revision_of FROM posts WHERE id = ?
        UNION
        SELECT p.id, p.revision_of FROM posts p
        JOIN ancestors a ON p.id = a.revision_of
    )
    SELECT id FROM ancestors WHERE revision_of IS NULL
"""

_DESCENDANTS_QUERY = """
    WITH RECURSIVE chain(id, depth) AS (
        SELECT id, 0 FROM posts WHERE id = ?
        UNION ALL
        SELECT p.id, c.depth + 1 FROM posts p
        JOIN chain c ON p.revision_of = c.id
    )
    SELECT posts.* FROM chain
    JOIN posts ON posts.id = chain.id
    ORDER BY chain.depth ASC, posts.created_at ASC
"""


def dict_factory(cursor: sqlite3.Cursor, row: tuple[Any, ...]) -> dict[str, Any]:
    """Convert SQLite row to dictionary."""
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


def parse_dt(s: str | None) -> datetime | None:
    return datetime.fromisoformat(s) if s else None


def _map_row(row: dict[str, Any]) -> Post:
    return Post(
        id=UUID(row["id"]),
        site_id=row["site_id"],
        remote_id=row["remote_id"],
        kind=row["kind"],
        status=row["status"],
        title=row["title"],
        content=row["content"],
        revision_of=UUID(row["revision_of"]) if row["revision_of"] else None,
        date_modified=parse_dt(row["date_modified"]),
        created_at=parse_dt(row["created_at"]) or datetime.min,
        updated_at=parse_dt(row["updated_at"]) or datetime.min,
    )


class SQLitePostContext:
    """Store view bound to one open transaction."""

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def existing_object(self, post_id: UUID) -> Post:
        row = self._conn.execute("SELECT * FROM posts WHERE id = ?", (str(post_id),)).fetchone()
        if not row:
            raise NotFoundError(post_id)
        return _map_row(row)

    def find_by_remote_id(self, site_id: int, remote_id: int) -> Post | None:
        row = self._conn.execute(
            "SELECT * FROM posts WHERE site_id = ? AND remote_id = ? AND revision_of IS NULL",
            (site_id, remote_id),
        ).fetchone()
        return _map_row(row) if row else None

    def save(self, post: Post) -> Post:
        self._conn.execute(
            """
            INSERT INTO posts (
                id, site_id, remote_id, kind, status, title, content,
                revision_of, date_modified, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                site_id=excluded.site_id,
                remote_id=excluded.remote_id,
                kind=excluded.kind,
                status=excluded.status,
                title=excluded.title,
                content=excluded.content,
                revision_of=excluded.revision_of,
                date_modified=excluded.date_modified,
                updated_at=excluded.updated_at
            """,
            (
                str(post.id),
                post.site_id,
                post.remote_id,
                post.kind,
                post.status,
                post.title,
                post.content,
                str(post.revision_of) if post.revision_of else None,
                post.date_modified.isoformat() if post.date_modified else None,
                post.created_at.isoformat(),
                post.updated_at.isoformat(),
            ),
        )
        return post

    def delete(self, post_id: UUID) -> None:
        self._conn.execute("DELETE FROM posts WHERE id = ?", (str(post_id),))

    def revision_chain(self, post_id: UUID) -> list[Post]:
        root = self._conn.execute(_ROOT_QUERY, (str(post_id),)).fetchone()
        if not root:
            raise NotFoundError(post_id)
        rows = self._conn.execute(_DESCENDANTS_QUERY, (root["id"],)).fetchall()
        return [_map_row(r) for r in rows]

    def list_posts(
        self,
        site_id: int,
        *,
        kind: PostKind | None = None,
        status: PostStatus | None = None,
    ) -> list[Post]:
        query = "SELECT * FROM posts WHERE site_id = ? AND revision_of IS NULL"
        params: list[str | int] = [site_id]

        if kind:
            query += " AND kind = ?"
            params.append(kind)
        if status:
            query += " AND status = ?"
            params.append(status)

        query += " ORDER BY created_at DESC"
        return [_map_row(r) for r in self._conn.execute(query, params).fetchall()]


class SQLitePostStore:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self, *, read_only: bool = False) -> sqlite3.Connection:
        # Autocommit mode: transactions are opened explicitly below
        conn = sqlite3.connect(self.db_path, isolation_level=None)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        if read_only:
            conn.execute("PRAGMA query_only = ON;")
        return conn

    def perform_and_save(self, block: Callable[[SQLitePostContext], T]) -> T:
        conn = self._get_conn()
        try:
            # IMMEDIATE takes the write lock up front so concurrent writers serialize
            conn.execute("BEGIN IMMEDIATE")
            try:
                result = block(SQLitePostContext(conn))
            except BaseException:
                conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")
            return result
        finally:
            conn.close()

    def perform_query(self, block: Callable[[SQLitePostContext], T]) -> T:
        conn = self._get_conn(read_only=True)
        try:
            conn.execute("BEGIN")
            try:
                return block(SQLitePostContext(conn))
            finally:
                conn.execute("ROLLBACK")
        finally:
            conn.close()
