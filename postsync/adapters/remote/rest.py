"""
WordPress.com REST (v1.1) post service.

One AsyncClient is shared by all sites; RestServiceFactory hands out a
thin per-site remote bound to it.
"""

from __future__ import annotations

import logging
import os
from types import TracebackType
from typing import Any

import httpx

from postsync.domain.entities import PostKind, RemotePost
from postsync.rules.models import RemoteRules
from postsync.services.errors import NetworkError

logger = logging.getLogger(__name__)

WPCOM_API_BASE = "https://public-api.wordpress.com/rest/v1.1"


def remote_post_from_json(data: dict[str, Any], site_id: int) -> RemotePost:
    """Map a v1.1 post payload onto RemotePost."""
    try:
        return RemotePost(
            site_id=int(data.get("site_ID") or site_id),
            remote_id=int(data["ID"]),
            status=data.get("status") or "draft",
            title=data.get("title") or "",
            content=data.get("content") or "",
            type=data.get("type") or "post",
            date_modified=data.get("modified") or None,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise NetworkError(f"Malformed post payload: {e}") from e


def remote_post_to_json(post: RemotePost) -> dict[str, Any]:
    return {
        "title": post.title,
        "content": post.content,
        "status": post.status,
        "type": post.type,
    }


class RestPostServiceRemote:
    """Post endpoints of one site."""

    def __init__(self, client: httpx.AsyncClient, site_id: int):
        self._client = client
        self.site_id = site_id

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        url = f"/sites/{self.site_id}{path}"
        try:
            response = await self._client.request(method, url, params=params, json=json)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            raise NetworkError(
                f"{method} {url} failed with HTTP {status_code}: {_error_message(e.response)}",
                status_code=status_code,
            ) from e
        except httpx.HTTPError as e:
            raise NetworkError(f"{method} {url} failed: {e}") from e
        except ValueError as e:
            raise NetworkError(f"{method} {url} returned malformed JSON") from e

        if not isinstance(data, dict):
            raise NetworkError(f"{method} {url} returned unexpected payload")
        return data

    def _post_path(self, post: RemotePost, suffix: str = "") -> str:
        if post.remote_id is None:
            raise ValueError("Remote post has no remote_id")
        return f"/posts/{post.remote_id}{suffix}"

    async def get_post(self, remote_id: int) -> RemotePost:
        data = await self._request("GET", f"/posts/{remote_id}", params={"context": "edit"})
        return remote_post_from_json(data, self.site_id)

    async def get_posts(self, kind: PostKind, *, number: int) -> list[RemotePost]:
        data = await self._request(
            "GET",
            "/posts/",
            params={"type": kind, "status": "any", "context": "edit", "number": number},
        )
        posts = data.get("posts")
        if not isinstance(posts, list):
            raise NetworkError("Post list response has no 'posts' array")
        return [remote_post_from_json(p, self.site_id) for p in posts]

    async def create(self, post: RemotePost) -> RemotePost:
        data = await self._request(
            "POST", "/posts/new", params={"context": "edit"}, json=remote_post_to_json(post)
        )
        return remote_post_from_json(data, self.site_id)

    async def update(self, post: RemotePost) -> RemotePost:
        data = await self._request(
            "POST",
            self._post_path(post),
            params={"context": "edit"},
            json=remote_post_to_json(post),
        )
        return remote_post_from_json(data, self.site_id)

    async def trash(self, post: RemotePost) -> RemotePost:
        # The delete endpoint moves a live post to the trash
        data = await self._request("POST", self._post_path(post, "/delete"))
        return remote_post_from_json(data, self.site_id)

    async def restore(self, post: RemotePost) -> RemotePost:
        # No body: post.status is ignored and the server picks the resulting status
        data = await self._request("POST", self._post_path(post, "/restore"))
        return remote_post_from_json(data, self.site_id)

    async def delete(self, post: RemotePost) -> None:
        path = self._post_path(post, "/delete")
        data = await self._request("POST", path)
        # First call only trashes a live post; a second one removes it for good
        if data.get("status") == "trash":
            logger.debug("Post %s was trashed remotely, deleting permanently", post.remote_id)
            await self._request("POST", path)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or response.reason_phrase)
    return response.reason_phrase


class RestServiceFactory:
    def __init__(
        self,
        base_url: str = WPCOM_API_BASE,
        token: str | None = None,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout_seconds,
            transport=transport,
        )

    @classmethod
    def from_rules(cls, rules: RemoteRules) -> RestServiceFactory:
        token = os.environ.get(rules.token_env)
        if not token:
            logger.warning("%s is not set, remote calls will be unauthenticated", rules.token_env)
        return cls(base_url=rules.base_url, token=token, timeout_seconds=rules.timeout_seconds)

    def for_site(self, site_id: int) -> RestPostServiceRemote:
        return RestPostServiceRemote(self._client, site_id)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> RestServiceFactory:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
