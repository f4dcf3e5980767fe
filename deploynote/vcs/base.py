"""Abstract source-control interface for the deploy note pipeline."""

from abc import ABC, abstractmethod

from deploynote.vcs.models import CommitIdentity, PullRequestInfo, StoredFile


class VCSProvider(ABC):
    """Abstract base class for source-control hosts.

    Every method raises ``deploynote.errors.TransportError`` (or one of its
    subclasses) when the host call fails.
    """

    @abstractmethod
    async def get_pull_request(self, repo_id: str, number: int) -> PullRequestInfo:
        """Fetch pull request metadata.

        Args:
            repo_id: Repository identifier in "owner/repo" format.
            number: Pull request number.
        """
        ...

    @abstractmethod
    async def list_changed_files(self, repo_id: str, number: int) -> list[str]:
        """List paths changed by the pull request, in host order."""
        ...

    @abstractmethod
    async def list_commit_messages(self, repo_id: str, number: int) -> list[str]:
        """List commit messages of the pull request, in host order."""
        ...

    @abstractmethod
    async def get_file(self, repo_id: str, path: str, ref: str) -> StoredFile:
        """Read a file and its sha at ``ref``.

        Raises:
            NotFoundError: the file does not exist at ``ref``.
        """
        ...

    @abstractmethod
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
        """Create (``sha`` is None) or update a file on ``branch``.

        Returns the new blob sha.

        Raises:
            ConflictError: ``sha`` no longer matches the file on ``branch``.
        """
        ...

    @abstractmethod
    async def create_comment(self, repo_id: str, number: int, body: str) -> str:
        """Post a comment on the pull request thread. Returns its URL."""
        ...
