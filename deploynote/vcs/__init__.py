"""Source-control providers for the deploy note pipeline."""

import os

from deploynote.config.models import VCSConfig
from deploynote.errors import ConfigurationError
from deploynote.vcs.base import VCSProvider
from deploynote.vcs.github import GitHubProvider
from deploynote.vcs.models import CommitIdentity, PullRequestInfo, StoredFile


def create_provider(config: VCSConfig) -> VCSProvider:
    """Create a VCS provider from config.

    Resolves the token from the environment variable named in config.token_env.
    """
    if config.provider != "github":
        raise ConfigurationError(
            f"Unsupported VCS provider: {config.provider!r}. "
            "Currently only 'github' is supported."
        )
    token = os.environ.get(config.token_env, "").strip()
    if not token:
        raise ConfigurationError(
            f"VCS token not found. Set the {config.token_env} environment variable."
        )
    return GitHubProvider(token=token, base_url=config.base_url)


__all__ = [
    "CommitIdentity",
    "GitHubProvider",
    "PullRequestInfo",
    "StoredFile",
    "VCSProvider",
    "create_provider",
]
