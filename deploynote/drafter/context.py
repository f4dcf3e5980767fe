"""ContextAssembler: collects pull request metadata into a ChangeContext."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from deploynote.drafter.models import ChangeContext
from deploynote.vcs.base import VCSProvider
from deploynote.vcs.models import PullRequestInfo

logger = logging.getLogger(__name__)


class ContextAssembler:
    """Fetches a pull request, its files and its commits, one call at a time."""

    def __init__(self, provider: VCSProvider) -> None:
        self.provider = provider

    async def assemble(self, repo_id: str, number: int) -> ChangeContext:
        pr = await self.provider.get_pull_request(repo_id, number)
        files = await self.provider.list_changed_files(repo_id, number)
        commits = await self.provider.list_commit_messages(repo_id, number)
        logger.info(
            "Assembled context for %s#%d: %d commit(s), %d changed file(s)",
            repo_id,
            number,
            len(commits),
            len(files),
        )
        return self.from_pull_request(pr, files, commits)

    @staticmethod
    def from_pull_request(
        pr: PullRequestInfo,
        changed_files: Sequence[str],
        commit_messages: Sequence[str],
    ) -> ChangeContext:
        """Build a ChangeContext from already-fetched host data."""
        return ChangeContext(
            title=pr.title,
            body=pr.body or "",
            number=pr.number,
            url=pr.url,
            commit_messages=tuple(commit_messages),
            changed_files=tuple(changed_files),
            branch=pr.head_ref,
            head_sha=pr.head_sha,
        )
