"""Pydantic models for source-control data."""

from pydantic import BaseModel, ConfigDict, Field


class PullRequestInfo(BaseModel):
    """The subset of a pull request the deploy note needs."""

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    body: str | None = None
    url: str = Field(description="HTML URL of the pull request")
    head_ref: str = Field(description="Branch name of the PR head")
    head_sha: str


class StoredFile(BaseModel):
    """A file read from the repository together with its blob sha.

    The sha is the concurrency token: passing it back on write makes the
    host reject the update if the file changed in between.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    content: str
    sha: str


class CommitIdentity(BaseModel):
    """Author/committer identity attached to commits."""

    name: str
    email: str
