import argparse
import asyncio
import logging
import sys
from pathlib import Path
from uuid import UUID

from postsync.app_shell.config import configure_logging, validate_ops_rules
from postsync.app_shell.context import ServiceContext
from postsync.components.posts import (
    DeletePostInput,
    GetPostInput,
    ListPostsInput,
    PostInput,
    PostListOutput,
    PostOperationOutput,
    PostOutput,
    RestorePostInput,
    SyncPostsInput,
    TrashPostInput,
    UploadPostInput,
    run,
)
from postsync.domain.entities import POST_STATUSES, Post
from postsync.rules.loader import load_rules

logger = logging.getLogger("cli")

RULES_PATH = "rules.yaml"


def get_context(rules_path: Path) -> ServiceContext:
    if not rules_path.exists():
        logger.error(f"Rules file {rules_path} not found.")
        sys.exit(1)

    rules = load_rules(rules_path)
    configure_logging(rules)
    base_dir = rules_path.resolve().parent
    validate_ops_rules(rules, base_dir)

    ctx = ServiceContext.create(rules, base_dir)
    ctx.migrator.run_migrations()
    return ctx


def _format_post(post: Post) -> str:
    remote = post.remote_id if post.remote_id is not None else "-"
    return f"{post.id}  {post.kind:<4}  {post.status:<7}  remote={remote}  {post.title}"


def _build_input(args: argparse.Namespace) -> PostInput:
    if args.command == "fetch":
        return GetPostInput(site_id=args.site_id, remote_id=args.remote_id)
    if args.command == "sync":
        return SyncPostsInput(site_id=args.site_id, kind=args.kind, number=args.number)
    if args.command == "list":
        return ListPostsInput(site_id=args.site_id, kind=args.kind, status=args.status)
    if args.command == "trash":
        return TrashPostInput(post_id=args.post_id)
    if args.command == "restore":
        return RestorePostInput(post_id=args.post_id, to_status=args.to_status)
    if args.command == "delete":
        return DeletePostInput(post_id=args.post_id)
    if args.command == "upload":
        return UploadPostInput(post_id=args.post_id)
    raise ValueError(f"Unknown command: {args.command}")


def _report(result: PostOutput | PostListOutput | PostOperationOutput) -> int:
    for error in result.errors:
        print(f"Error [{error.code}]: {error.message}", file=sys.stderr)

    if isinstance(result, PostOutput) and result.post:
        print(_format_post(result.post))
    elif isinstance(result, PostListOutput):
        for post in result.items:
            print(_format_post(post))
        print(f"{len(result.items)} post(s).")
    elif isinstance(result, PostOperationOutput) and result.success:
        for post_id in result.post_ids:
            print(post_id)

    return 0 if result.success else 1


async def _dispatch(ctx: ServiceContext, args: argparse.Namespace) -> int:
    try:
        result = await run(_build_input(args), repo=ctx.repository)
    finally:
        await ctx.aclose()
    return _report(result)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Post lifecycle sync CLI")
    parser.add_argument("--rules", default=RULES_PATH, help="Path to rules.yaml")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # migrate
    subparsers.add_parser("migrate", help="Apply pending database migrations")

    # fetch
    fetch_parser = subparsers.add_parser("fetch", help="Fetch a remote post into the local store")
    fetch_parser.add_argument("site_id", type=int)
    fetch_parser.add_argument("remote_id", type=int)

    # sync
    sync_parser = subparsers.add_parser("sync", help="Sync a page of remote posts")
    sync_parser.add_argument("site_id", type=int)
    sync_parser.add_argument("--kind", choices=["post", "page"], default="post")
    sync_parser.add_argument("--number", type=int, help="Page size (defaults to rules)")

    # list
    list_parser = subparsers.add_parser("list", help="List local posts")
    list_parser.add_argument("site_id", type=int)
    list_parser.add_argument("--kind", choices=["post", "page"])
    list_parser.add_argument("--status", choices=POST_STATUSES)

    # lifecycle
    for name, help_text in (
        ("trash", "Move a post to the trash (deletes if already trashed)"),
        ("delete", "Delete a post and all of its revisions"),
        ("upload", "Push local changes to the remote"),
    ):
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("post_id", type=UUID)

    restore_parser = subparsers.add_parser("restore", help="Restore a trashed post")
    restore_parser.add_argument("post_id", type=UUID)
    restore_parser.add_argument(
        "--to",
        dest="to_status",
        choices=[s for s in POST_STATUSES if s != "trash"],
        default="publish",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    ctx = get_context(Path(args.rules))

    if args.command == "migrate":
        # get_context already applied anything pending
        print("All migrations applied.")
        asyncio.run(ctx.aclose())
        return 0

    return asyncio.run(_dispatch(ctx, args))


if __name__ == "__main__":
    sys.exit(main())
