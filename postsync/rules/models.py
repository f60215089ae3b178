from pydantic import BaseModel, Field, field_validator

from postsync.domain.entities import PostStatus


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class RemoteRules(BaseModel):
    base_url: str = "https://public-api.wordpress.com/rest/v1.1"
    timeout_seconds: float = Field(default=30.0, gt=0)
    token_env: str = "WPCOM_AUTH_TOKEN"
    page_size: int = Field(default=100, ge=1, le=100)


class StorageRules(BaseModel):
    db_path: str = "posts.db"
    migrations_dir: str = "migrations"


class PostRules(BaseModel):
    unknown_status_fallback: PostStatus = "draft"


class LoggingRules(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)


class Rules(BaseModel):
    project: ProjectRules
    remote: RemoteRules = Field(default_factory=RemoteRules)
    storage: StorageRules = Field(default_factory=StorageRules)
    posts: PostRules = Field(default_factory=PostRules)
    logging: LoggingRules = Field(default_factory=LoggingRules)
    ops: OpsRules = Field(default_factory=OpsRules)
