"""NoteStore: commits the deploy note to the PR branch at most once per run."""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel

from deploynote.config.models import StoreConfig
from deploynote.drafter.models import ChangeContext
from deploynote.errors import ConsistencyError, NotFoundError
from deploynote.output.validator import DeployNote
from deploynote.vcs.base import VCSProvider
from deploynote.vcs.models import CommitIdentity, StoredFile

logger = logging.getLogger(__name__)


class StoreOutcome(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"


class StoreResult(BaseModel):
    path: str
    outcome: StoreOutcome
    sha: str | None = None


def artifact_path(config: StoreConfig, number: int) -> str:
    """Repository path of the deploy note for PR ``number``."""
    return f"{config.namespace}/{number}.{config.extension}"


class NoteStore:
    """Reconciles a DeployNote with the copy already on the PR branch.

    Outcomes:
      - no file yet: create it without a sha
      - same non-empty content: no write at all
      - different or empty content: update, conditioned on the sha just read

    A successful write is followed by a read-back; an absent or empty file
    raises ConsistencyError.
    """

    def __init__(self, provider: VCSProvider, repo_id: str, config: StoreConfig) -> None:
        self.provider = provider
        self.repo_id = repo_id
        self.config = config

    async def read_existing(self, path: str, branch: str) -> StoredFile | None:
        """Return the stored note, or None when the branch has none."""
        logger.info("Checking for existing deploy note: %s", path)
        try:
            existing = await self.provider.get_file(self.repo_id, path, branch)
        except NotFoundError:
            logger.info("No existing deploy note found, will create new one")
            return None
        logger.info("Found existing deploy note (sha %s)", existing.sha)
        return existing

    @staticmethod
    def needs_write(existing: StoredFile | None, note: DeployNote) -> bool:
        if existing is None:
            return True
        # An empty read is never trusted as "already up to date"
        return existing.content == "" or existing.content != note.text

    async def save(
        self, context: ChangeContext, note: DeployNote, *, dry_run: bool = False
    ) -> StoreResult:
        path = artifact_path(self.config, context.number)
        existing = await self.read_existing(path, context.branch)

        logger.debug("Existing content: %r", existing.content if existing else None)
        logger.debug("Computed content: %r", note.text)
        if not self.needs_write(existing, note):
            logger.info("Deploy note content unchanged, skipping commit")
            return StoreResult(path=path, outcome=StoreOutcome.UNCHANGED, sha=existing.sha)

        outcome = StoreOutcome.CREATED if existing is None else StoreOutcome.UPDATED
        if dry_run:
            logger.info("dry-run: would %s %s", "create" if existing is None else "update", path)
            return StoreResult(
                path=path, outcome=StoreOutcome.SKIPPED, sha=existing.sha if existing else None
            )

        new_sha = await self.provider.put_file(
            self.repo_id,
            path,
            note.text,
            branch=context.branch,
            message=self.config.commit_message.format(number=context.number),
            identity=CommitIdentity(
                name=self.config.author_name, email=self.config.author_email
            ),
            sha=existing.sha if existing else None,
        )
        logger.info("Deploy note committed to branch: %s", context.branch)

        await self._verify(path, context.branch)
        return StoreResult(path=path, outcome=outcome, sha=new_sha)

    async def _verify(self, path: str, branch: str) -> None:
        try:
            written = await self.provider.get_file(self.repo_id, path, branch)
        except NotFoundError as e:
            raise ConsistencyError(
                f"Deploy note file was not created at {path} - file not found"
            ) from e
        if not written.content:
            raise ConsistencyError(f"Deploy note file was not created at {path}")
