from __future__ import annotations

from typing import Any

from openclaw import logger as logger_mod

from .base import LLMClient, LLMConfig
from .errors import EmptyResponseError, MissingCredentialError, UpstreamError

log = logger_mod.get_logger()

DEFAULT_MAX_TOKENS = 900


class AnthropicLLM(LLMClient):
    """Anthropic Messages API backend."""

    name = "anthropic"

    def __init__(self, config: LLMConfig, client: Any = None):
        self.config = config
        self._client = client

    def has_credentials(self) -> bool:
        return bool(self.config.api_key)

    def _sdk(self) -> Any:
        if self._client is None:
            from anthropic import Anthropic

            self._client = Anthropic(api_key=self.config.api_key)
        return self._client

    def _extract_text(self, resp: Any) -> str:
        content = getattr(resp, "content", None)
        if not isinstance(content, list):
            raise UpstreamError("Malformed Anthropic response: no content blocks")
        if not content:
            return ""
        # Only the first block is considered, and only when it is text
        first = content[0]
        if getattr(first, "type", None) != "text":
            return ""
        return getattr(first, "text", "") or ""

    def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        if not self.has_credentials():
            raise MissingCredentialError(
                f"Missing required environment variable: {self.config.api_key_env}"
            )

        import anthropic

        kwargs: dict[str, Any] = {
            "model": self.config.model,
            "max_tokens": max_tokens or DEFAULT_MAX_TOKENS,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            kwargs["system"] = system
        if temperature is not None:
            kwargs["temperature"] = temperature

        try:
            resp = self._sdk().messages.create(**kwargs)
        except anthropic.AnthropicError as e:
            log.error(f"Anthropic request failed (model={self.config.model}): {e}")
            raise UpstreamError(f"Anthropic request failed: {e}") from e

        text = self._extract_text(resp)
        if not text.strip():
            raise EmptyResponseError("Anthropic returned an empty response")
        return text
