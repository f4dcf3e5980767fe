"""Pydantic models for the drafter subsystem."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ChangeContext(BaseModel):
    """Normalized change-request metadata fed to the prompt.

    Built once per run and never mutated; sequences keep the order the
    source-control host returned them in.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    body: str = ""
    number: int
    url: str
    commit_messages: tuple[str, ...] = ()
    changed_files: tuple[str, ...] = ()
    branch: str
    head_sha: str


class RawCandidate(BaseModel):
    """Untrusted model output. Only the validator turns this into a DeployNote."""

    model_config = ConfigDict(frozen=True)

    text: str
    model: str = ""
    input_tokens: int = 0
    output_tokens: int = 0


class PromptSettings(BaseModel):
    """Decoding parameters sent with every synthesis request."""

    max_tokens: int = Field(default=1000, gt=0)
