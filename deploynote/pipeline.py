"""DeployNotePipeline: the ordered chain from pull request to PR comment."""

from __future__ import annotations

import logging

from pydantic import BaseModel

from deploynote.config.models import DeployNoteConfig
from deploynote.drafter.context import ContextAssembler
from deploynote.drafter.models import ChangeContext, PromptSettings
from deploynote.drafter.synthesizer import NoteSynthesizer
from deploynote.errors import ConfigurationError
from deploynote.llm.base import LLMProvider
from deploynote.output.notifier import Notifier
from deploynote.output.store import NoteStore, StoreResult
from deploynote.output.validator import DeployNote, NoteValidator
from deploynote.vcs.base import VCSProvider

logger = logging.getLogger(__name__)


class PipelineResult(BaseModel):
    context: ChangeContext
    note: DeployNote
    store: StoreResult
    comment_url: str | None = None


class DeployNotePipeline:
    """Runs one change request through every stage, in order.

    Pipeline:
        ContextAssembler → NoteSynthesizer → NoteValidator → NoteStore → Notifier

    Any stage error propagates unchanged and stops the remaining stages.
    """

    def __init__(
        self,
        config: DeployNoteConfig,
        vcs: VCSProvider,
        llm: LLMProvider,
    ) -> None:
        repo_id = config.trigger.repository
        if not repo_id:
            raise ConfigurationError(
                "Repository not set. Pass --repository or set the REPOSITORY environment variable."
            )
        self.config = config
        self.repo_id = repo_id
        self.assembler = ContextAssembler(vcs)
        self.synthesizer = NoteSynthesizer(
            llm, PromptSettings(max_tokens=config.llm.max_tokens)
        )
        self.validator = NoteValidator()
        self.store = NoteStore(vcs, repo_id, config.store)
        self.notifier = Notifier(vcs, repo_id)

    async def run(self, number: int | None = None, *, dry_run: bool = False) -> PipelineResult:
        number = number or self.config.trigger.pr_number
        if not number:
            raise ConfigurationError(
                "PR number not set. Pass --pr or set the PR_NUMBER environment variable."
            )
        logger.info("Generating deploy note for %s#%d", self.repo_id, number)

        # 1. Gather PR metadata
        context = await self.assembler.assemble(self.repo_id, number)

        # 2. Ask the model for a candidate
        candidate = await self.synthesizer.synthesize(context)

        # 3. Validate, falling back to the null note
        note = self.validator.validate(candidate, context)

        # 4. Commit to the PR branch (at most one write)
        stored = await self.store.save(context, note, dry_run=dry_run)

        # 5. Comment on the PR
        comment_url = None
        if dry_run:
            logger.info("dry-run: not commenting on PR #%d", number)
        else:
            comment_url = await self.notifier.notify(context, note, stored.path)

        logger.info("Deploy note job completed for PR #%d (%s)", number, stored.outcome.value)
        return PipelineResult(context=context, note=note, store=stored, comment_url=comment_url)
