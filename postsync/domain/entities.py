from datetime import UTC, datetime
from typing import Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

# --- Enums / Literals ---
PostStatus = Literal["draft", "pending", "private", "publish", "future", "trash"]
PostKind = Literal["post", "page"]

POST_STATUSES: tuple[PostStatus, ...] = (
    "draft",
    "pending",
    "private",
    "publish",
    "future",
    "trash",
)


def utcnow() -> datetime:
    return datetime.now(UTC)


# --- Local ---

class Post(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    site_id: int
    remote_id: int | None = None
    kind: PostKind = "post"
    status: PostStatus = "draft"
    title: str = ""
    content: str = ""

    # Revisions are separate records pointing back at the record they revise
    revision_of: UUID | None = None

    date_modified: datetime | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_local_only(self) -> bool:
        return self.remote_id is None

    @property
    def is_revision(self) -> bool:
        return self.revision_of is not None


# --- Remote ---

class RemotePost(BaseModel):
    site_id: int
    remote_id: int | None = None
    status: str = "draft"
    title: str = ""
    content: str = ""
    type: str = "post"
    date_modified: datetime | None = None
