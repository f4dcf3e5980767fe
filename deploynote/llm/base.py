"""Abstract LLM interface for deploy note synthesis."""

from __future__ import annotations

from abc import ABC, abstractmethod

from deploynote.llm.models import LLMConfig, LLMResponse


class LLMProvider(ABC):
    """Provider-agnostic interface for one-shot text generation.

    Adapters make exactly one request per call; SDK-level retries are off.
    """

    def __init__(self, config: LLMConfig) -> None:
        self.config = config

    @abstractmethod
    async def generate(
        self,
        system: str,
        user: str,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Generate a complete response (one-shot)."""
        ...
