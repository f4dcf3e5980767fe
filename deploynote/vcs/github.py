"""GitHub VCS provider using PyGithub."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from functools import cached_property
from typing import TypeVar

from github import Auth, Github, GithubException, InputGitAuthor, UnknownObjectException
from github.Repository import Repository

from deploynote.errors import ConfigurationError, ConflictError, NotFoundError, TransportError
from deploynote.vcs.base import VCSProvider
from deploynote.vcs.models import CommitIdentity, PullRequestInfo, StoredFile

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _describe(exc: GithubException) -> str:
    data = exc.data if isinstance(exc.data, dict) else {}
    return data.get("message") or str(exc)


class GitHubProvider(VCSProvider):
    """GitHub implementation of VCSProvider using PyGithub.

    PyGithub is synchronous, so all blocking calls are wrapped
    with asyncio.to_thread() to avoid blocking the event loop.
    """

    def __init__(self, token: str, base_url: str | None = None):
        if not token:
            raise ConfigurationError("GitHub token required.")
        self._token = token
        self._base_url = base_url

    @cached_property
    def _client(self) -> Github:
        kwargs = {"auth": Auth.Token(self._token), "retry": None}
        if self._base_url:
            kwargs["base_url"] = self._base_url
        return Github(**kwargs)

    def _get_repo(self, repo_id: str) -> Repository:
        """Get a PyGithub Repository object by 'owner/repo' identifier."""
        return self._client.get_repo(repo_id)

    async def _call(self, operation: str, fn: Callable[[], T]) -> T:
        """Run a blocking PyGithub call in a thread and map its errors."""
        try:
            return await asyncio.to_thread(fn)
        except UnknownObjectException as e:
            raise NotFoundError(operation, _describe(e), status=e.status, cause=e) from e
        except GithubException as e:
            if e.status == 409:
                raise ConflictError(operation, _describe(e), status=e.status, cause=e) from e
            raise TransportError(operation, _describe(e), status=e.status, cause=e) from e

    async def get_pull_request(self, repo_id: str, number: int) -> PullRequestInfo:
        def _sync() -> PullRequestInfo:
            pr = self._get_repo(repo_id).get_pull(number)
            return PullRequestInfo(
                number=pr.number,
                title=pr.title,
                body=pr.body,
                url=pr.html_url,
                head_ref=pr.head.ref,
                head_sha=pr.head.sha,
            )

        return await self._call(f"get pull request {repo_id}#{number}", _sync)

    async def list_changed_files(self, repo_id: str, number: int) -> list[str]:
        def _sync() -> list[str]:
            pr = self._get_repo(repo_id).get_pull(number)
            return [f.filename for f in pr.get_files()]

        return await self._call(f"list files of {repo_id}#{number}", _sync)

    async def list_commit_messages(self, repo_id: str, number: int) -> list[str]:
        def _sync() -> list[str]:
            pr = self._get_repo(repo_id).get_pull(number)
            return [c.commit.message for c in pr.get_commits()]

        return await self._call(f"list commits of {repo_id}#{number}", _sync)

    async def get_file(self, repo_id: str, path: str, ref: str) -> StoredFile:
        def _sync() -> StoredFile:
            content = self._get_repo(repo_id).get_contents(path, ref=ref)
            # get_contents returns a list for directories
            if isinstance(content, list):
                raise GithubException(
                    422, {"message": f"Path '{path}' is a directory, not a file."}, None
                )
            raw = content.decoded_content if content.content else b""
            return StoredFile(path=content.path, content=raw.decode("utf-8"), sha=content.sha)

        return await self._call(f"read {path}@{ref}", _sync)

    async def put_file(
        self,
        repo_id: str,
        path: str,
        content: str,
        *,
        branch: str,
        message: str,
        identity: CommitIdentity,
        sha: str | None = None,
    ) -> str:
        def _sync() -> str:
            repo = self._get_repo(repo_id)
            author = InputGitAuthor(identity.name, identity.email)
            if sha is None:
                result = repo.create_file(
                    path, message, content, branch=branch, committer=author, author=author
                )
            else:
                result = repo.update_file(
                    path, message, content, sha, branch=branch, committer=author, author=author
                )
            return result["content"].sha

        action = "create" if sha is None else "update"
        new_sha = await self._call(f"{action} {path}@{branch}", _sync)
        logger.debug("%s %s on %s -> %s", action, path, branch, new_sha)
        return new_sha

    async def create_comment(self, repo_id: str, number: int, body: str) -> str:
        def _sync() -> str:
            comment = self._get_repo(repo_id).get_issue(number).create_comment(body)
            return comment.html_url

        return await self._call(f"comment on {repo_id}#{number}", _sync)
