"""LLM provider abstraction layer."""

import os

from deploynote.config.models import LLMSettings
from deploynote.errors import ConfigurationError
from deploynote.llm.base import LLMProvider
from deploynote.llm.claude import ClaudeProvider
from deploynote.llm.models import LLMConfig, LLMError, LLMResponse, TokenUsage
from deploynote.llm.openai_adapter import OpenAIProvider

_PROVIDER_MAP: dict[str, type[LLMProvider]] = {
    "deepseek": OpenAIProvider,
    "openai": OpenAIProvider,
    "anthropic": ClaudeProvider,
}

_DEFAULT_BASE_URLS: dict[str, str] = {
    "deepseek": "https://api.deepseek.com/v1",
}


def create_llm_provider(settings: LLMSettings) -> LLMProvider:
    """Create an LLM provider from app-level settings.

    Resolves the API key from the env var in settings.api_key_env before any
    client is built, so a missing credential never reaches the network.
    """
    cls = _PROVIDER_MAP.get(settings.provider)
    if cls is None:
        raise ConfigurationError(
            f"Unsupported LLM provider: {settings.provider!r}. "
            f"Supported: {', '.join(_PROVIDER_MAP)}"
        )
    api_key = os.environ.get(settings.api_key_env, "").strip()
    if not api_key:
        raise ConfigurationError(
            f"Missing API key: set environment variable {settings.api_key_env!r}"
        )
    llm_config = LLMConfig(
        provider=settings.provider,
        model=settings.model,
        max_tokens=settings.max_tokens,
        temperature=settings.temperature,
        timeout=settings.timeout,
        api_key=api_key,
        base_url=settings.base_url or _DEFAULT_BASE_URLS.get(settings.provider),
    )
    return cls(llm_config)


__all__ = [
    "ClaudeProvider",
    "LLMConfig",
    "LLMError",
    "LLMProvider",
    "LLMResponse",
    "OpenAIProvider",
    "TokenUsage",
    "create_llm_provider",
]
