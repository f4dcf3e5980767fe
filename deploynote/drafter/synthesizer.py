"""NoteSynthesizer: one generative-model call per change request."""

from __future__ import annotations

import logging

from deploynote.drafter.models import ChangeContext, PromptSettings, RawCandidate
from deploynote.drafter.prompts import PromptTemplate
from deploynote.errors import SynthesisError
from deploynote.llm.base import LLMProvider
from deploynote.llm.models import LLMError

logger = logging.getLogger(__name__)


class NoteSynthesizer:
    """Sends the rendered prompt to the model and returns its raw answer.

    The result is a RawCandidate: untrusted text that must go through
    NoteValidator before it is stored or posted.
    """

    def __init__(
        self,
        llm: LLMProvider,
        settings: PromptSettings | None = None,
        template: PromptTemplate | None = None,
    ) -> None:
        self.llm = llm
        self.settings = settings or PromptSettings()
        self.template = template or PromptTemplate()

    async def synthesize(self, context: ChangeContext) -> RawCandidate:
        system, user = self.template.render(context)
        logger.info("Requesting deploy note for PR #%d from %s", context.number, self.llm.config.model)
        try:
            response = await self.llm.generate(
                system=system,
                user=user,
                max_tokens=self.settings.max_tokens,
            )
        except LLMError as e:
            raise SynthesisError(f"Failed to generate deploy note: {e}") from e

        logger.debug("Model response (%s): %r", response.model, response.content)
        return RawCandidate(
            text=response.content.strip(),
            model=response.model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )
