from __future__ import annotations

from typing import Any

from openclaw import logger as logger_mod

from .base import LLMClient, LLMConfig
from .errors import EmptyResponseError, MissingCredentialError, UpstreamError

log = logger_mod.get_logger()

DEFAULT_TEMPERATURE = 0.4


class OpenAILLM(LLMClient):
    """OpenAI (or any OpenAI-compatible endpoint) via chat completions.

    `AI_BASE_URL` lets this backend talk to compatible gateways as well.
    """

    name = "openai"

    def __init__(self, config: LLMConfig, client: Any = None):
        self.config = config
        self._client = client

    def has_credentials(self) -> bool:
        return bool(self.config.api_key)

    def _sdk(self) -> Any:
        if self._client is None:
            from openai import OpenAI

            self._client = OpenAI(
                api_key=self.config.api_key, base_url=self.config.base_url
            )
        return self._client

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

        import openai

        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        kwargs: dict[str, Any] = {
            "model": self.config.model,
            "messages": messages,
            "temperature": DEFAULT_TEMPERATURE if temperature is None else temperature,
        }
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens

        try:
            resp = self._sdk().chat.completions.create(**kwargs)
        except openai.OpenAIError as e:
            log.error(f"OpenAI request failed (model={self.config.model}): {e}")
            raise UpstreamError(f"OpenAI request failed: {e}") from e

        try:
            text = resp.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise UpstreamError("Malformed OpenAI response: no choices") from e

        if not text or not text.strip():
            raise EmptyResponseError("OpenAI returned an empty response")
        return text
