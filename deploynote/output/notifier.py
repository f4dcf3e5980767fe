"""Notifier: posts the deploy note on the pull request thread."""

from __future__ import annotations

import logging

from deploynote.drafter.models import ChangeContext
from deploynote.output.validator import DeployNote
from deploynote.vcs.base import VCSProvider

logger = logging.getLogger(__name__)

COMMENT_TEMPLATE = """\

## Deploy Note Generated

A deploy note has been automatically generated for this PR:

```markdown
{note}
```

This note has been saved to `{path}` and committed to this PR branch.
"""


def render_comment(note: DeployNote, path: str) -> str:
    return COMMENT_TEMPLATE.format(note=note.text, path=path)


class Notifier:
    def __init__(self, provider: VCSProvider, repo_id: str) -> None:
        self.provider = provider
        self.repo_id = repo_id

    async def notify(self, context: ChangeContext, note: DeployNote, path: str) -> str:
        """Post the comment and return its URL."""
        url = await self.provider.create_comment(
            self.repo_id, context.number, render_comment(note, path)
        )
        logger.info("Comment added to PR #%d", context.number)
        return url
