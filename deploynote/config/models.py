from pydantic import BaseModel, Field, field_validator
from typing import Literal


class LLMSettings(BaseModel):
    provider: Literal["deepseek", "openai", "anthropic"] = "deepseek"
    model: str = "deepseek-reasoner"
    api_key_env: str = "DEEPSEEK_API_KEY"
    base_url: str | None = None
    max_tokens: int = 1000
    temperature: float = 0.3
    timeout: int = 120


class VCSConfig(BaseModel):
    provider: Literal["github"] = "github"
    token_env: str = "GITHUB_TOKEN"
    base_url: str | None = None


class StoreConfig(BaseModel):
    namespace: str = "dev-utils/deployNotes"
    extension: str = "md"
    commit_message: str = "Add deploy note for PR #{number}"
    author_name: str = "GitHub Actions"
    author_email: str = "actions@github.com"

    @field_validator("namespace")
    @classmethod
    def _strip_slashes(cls, v: str) -> str:
        v = v.strip("/")
        if not v or ".." in v.split("/"):
            raise ValueError(f"invalid store namespace: {v!r}")
        return v

    @field_validator("extension")
    @classmethod
    def _strip_dot(cls, v: str) -> str:
        v = v.lstrip(".")
        if not v:
            raise ValueError("store extension must not be empty")
        return v


class TriggerConfig(BaseModel):
    repository: str | None = None
    pr_number: int | None = None

    @field_validator("repository")
    @classmethod
    def _check_repository(cls, v: str | None) -> str | None:
        if v is None:
            return v
        parts = v.split("/")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise ValueError(f"repository must be 'owner/name', got {v!r}")
        return v

    @field_validator("pr_number")
    @classmethod
    def _check_pr_number(cls, v: int | None) -> int | None:
        if v is not None and v <= 0:
            raise ValueError(f"pr_number must be positive, got {v}")
        return v


class DeployNoteConfig(BaseModel):
    llm: LLMSettings = Field(default_factory=LLMSettings)
    vcs: VCSConfig = Field(default_factory=VCSConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    trigger: TriggerConfig = Field(default_factory=TriggerConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
