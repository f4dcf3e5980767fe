"""Shared test fixtures for deploynote."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from deploynote.config.models import DeployNoteConfig, TriggerConfig
from deploynote.drafter.models import ChangeContext
from deploynote.errors import NotFoundError
from deploynote.llm.base import LLMProvider
from deploynote.llm.models import LLMConfig, LLMResponse, TokenUsage
from deploynote.vcs.base import VCSProvider
from deploynote.vcs.models import CommitIdentity, PullRequestInfo, StoredFile

GOOD_NOTE = """\
### [Add CSV export](https://github.com/acme/shop/pull/42)

**Test Script**

1. Open the Orders page and click the 'Export CSV' button. A file named orders.csv downloads.
2. Open orders.csv. It lists every order shown on the page.

**Launch Requirements**

No special requirements"""


class InMemoryVCS(VCSProvider):
    """A VCSProvider backed by a dict, recording every write and comment."""

    def __init__(
        self,
        pr: PullRequestInfo,
        files: list[str] | None = None,
        commits: list[str] | None = None,
    ) -> None:
        self.pr = pr
        self.files = files or []
        self.commits = commits or []
        self.contents: dict[tuple[str, str], StoredFile] = {}
        self.writes: list[dict] = []
        self.comments: list[str] = []
        self._next_sha = 0

    def seed(self, path: str, branch: str, content: str, sha: str) -> None:
        self.contents[(path, branch)] = StoredFile(path=path, content=content, sha=sha)

    async def get_pull_request(self, repo_id, number):
        if number != self.pr.number:
            raise NotFoundError(f"get pull request {repo_id}#{number}", "Not Found", status=404)
        return self.pr

    async def list_changed_files(self, repo_id, number):
        return list(self.files)

    async def list_commit_messages(self, repo_id, number):
        return list(self.commits)

    async def get_file(self, repo_id, path, ref):
        try:
            return self.contents[(path, ref)]
        except KeyError:
            raise NotFoundError(f"read {path}@{ref}", "Not Found", status=404) from None

    async def put_file(self, repo_id, path, content, *, branch, message, identity, sha=None):
        self._next_sha += 1
        new_sha = f"sha-{self._next_sha}"
        self.writes.append(
            {"path": path, "content": content, "branch": branch, "message": message,
             "identity": identity, "sha": sha}
        )
        self.contents[(path, branch)] = StoredFile(path=path, content=content, sha=new_sha)
        return new_sha

    async def create_comment(self, repo_id, number, body):
        self.comments.append(body)
        return f"https://github.com/{repo_id}/pull/{number}#issuecomment-{len(self.comments)}"


@pytest.fixture
def sample_pr():
    return PullRequestInfo(
        number=42,
        title="Add CSV export",
        body="Adds an export button to the orders page.",
        url="https://github.com/acme/shop/pull/42",
        head_ref="feature/csv-export",
        head_sha="0a1b2c3d",
    )


@pytest.fixture
def sample_context():
    return ChangeContext(
        title="Add CSV export",
        body="Adds an export button to the orders page.",
        number=42,
        url="https://github.com/acme/shop/pull/42",
        commit_messages=("Add export button", "Write CSV serializer"),
        changed_files=("web/orders.tsx", "api/export.py"),
        branch="feature/csv-export",
        head_sha="0a1b2c3d",
    )


@pytest.fixture
def sample_config():
    return DeployNoteConfig(trigger=TriggerConfig(repository="acme/shop", pr_number=42))


@pytest.fixture
def identity():
    return CommitIdentity(name="GitHub Actions", email="actions@github.com")


@pytest.fixture
def memory_vcs(sample_pr):
    return InMemoryVCS(
        sample_pr,
        files=["web/orders.tsx", "api/export.py"],
        commits=["Add export button", "Write CSV serializer"],
    )


@pytest.fixture
def mock_vcs_provider(sample_pr):
    provider = MagicMock(spec=VCSProvider)
    provider.get_pull_request = AsyncMock(return_value=sample_pr)
    provider.list_changed_files = AsyncMock(return_value=["web/orders.tsx", "api/export.py"])
    provider.list_commit_messages = AsyncMock(
        return_value=["Add export button", "Write CSV serializer"]
    )
    provider.get_file = AsyncMock(side_effect=NotFoundError("read", "Not Found", status=404))
    provider.put_file = AsyncMock(return_value="new-sha")
    provider.create_comment = AsyncMock(return_value="https://github.com/acme/shop/pull/42#c1")
    return provider


def make_llm(content: str) -> MagicMock:
    provider = MagicMock(spec=LLMProvider)
    provider.config = LLMConfig(provider="deepseek", model="test-model")
    provider.generate = AsyncMock(
        return_value=LLMResponse(
            content=content,
            usage=TokenUsage(input_tokens=100, output_tokens=250),
            model="test-model",
        )
    )
    return provider


@pytest.fixture
def mock_llm_provider():
    return make_llm(GOOD_NOTE)
