"""OpenAI-compatible adapter (OpenAI and DeepSeek chat completions)."""

from __future__ import annotations

from openai import APIError, AsyncOpenAI

from deploynote.llm.base import LLMProvider
from deploynote.llm.models import LLMConfig, LLMError, LLMResponse, TokenUsage


class OpenAIProvider(LLMProvider):
    """Chat-completions adapter using the OpenAI async SDK.

    DeepSeek speaks the same wire protocol, so it is served by this class
    with ``base_url`` pointed at the DeepSeek endpoint.
    """

    def __init__(self, config: LLMConfig) -> None:
        super().__init__(config)
        self._client = AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            max_retries=0,
        )

    async def generate(
        self,
        system: str,
        user: str,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        try:
            response = await self._client.chat.completions.create(
                model=self.config.model,
                max_tokens=max_tokens or self.config.max_tokens,
                temperature=self.config.temperature,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
            )
        except APIError as e:
            raise LLMError(self.config.provider, "generate", e) from e
        if not response.choices:
            raise LLMError(
                self.config.provider,
                "generate",
                ValueError("No choices in chat completion response"),
            )
        choice = response.choices[0]
        usage = response.usage
        return LLMResponse(
            content=choice.message.content or "",
            usage=TokenUsage(
                input_tokens=usage.prompt_tokens if usage else 0,
                output_tokens=usage.completion_tokens if usage else 0,
            ),
            model=response.model,
        )
