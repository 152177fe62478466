from __future__ import annotations

from openclaw import logger as logger_mod
from openclaw.config import Settings

from .anthropic_client import AnthropicLLM
from .base import LLMClient, LLMConfig
from .gemini_client import GeminiLLM
from .openai_client import OpenAILLM

log = logger_mod.get_logger()

DEFAULT_PROVIDER = "openai"

PROVIDER_ALIASES: dict[str, tuple[str, ...]] = {
    "openai": ("openai", "gpt", "openai-compatible"),
    "anthropic": ("anthropic", "claude"),
    "gemini": ("gemini", "google"),
}


def resolve_provider(provider: str | None) -> str:
    """Map a configured provider identifier to a backend name.

    Matching is case-insensitive. Unknown identifiers resolve to the default
    OpenAI-compatible backend.
    """

    p = (provider or "").lower().strip()
    for name, aliases in PROVIDER_ALIASES.items():
        if p in aliases:
            return name
    if p:
        log.warning(
            f"Unknown AI_PROVIDER {provider!r}; falling back to {DEFAULT_PROVIDER}"
        )
    return DEFAULT_PROVIDER


def build_llm(settings: Settings) -> LLMClient:
    """Factory for provider clients.

    Providers:
    - openai (default; any OpenAI-compatible endpoint via AI_BASE_URL)
    - anthropic / claude
    - gemini / google
    """

    name = resolve_provider(settings.ai_provider)
    if name == "anthropic":
        return AnthropicLLM(
            LLMConfig(
                provider="anthropic",
                model=settings.anthropic_model,
                api_key=settings.anthropic_api_key,
                api_key_env="ANTHROPIC_API_KEY",
            )
        )
    if name == "gemini":
        return GeminiLLM(
            LLMConfig(
                provider="gemini",
                model=settings.gemini_model,
                api_key=settings.gemini_api_key,
                api_key_env="GEMINI_API_KEY",
            )
        )
    return OpenAILLM(
        LLMConfig(
            provider="openai",
            model=settings.ai_model,
            api_key=settings.ai_api_key,
            api_key_env="AI_API_KEY",
            base_url=settings.ai_base_url,
        )
    )
