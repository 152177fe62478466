from __future__ import annotations

from typing import Any

from openclaw import logger as logger_mod

from .base import LLMClient, LLMConfig
from .errors import EmptyResponseError, MissingCredentialError, UpstreamError

log = logger_mod.get_logger()


class GeminiLLM(LLMClient):
    """Google Gemini backend (google-genai SDK)."""

    name = "gemini"

    def __init__(self, config: LLMConfig, client: Any = None):
        self.config = config
        self._client = client

    def has_credentials(self) -> bool:
        return bool(self.config.api_key)

    def _sdk(self) -> Any:
        if self._client is None:
            from google import genai

            self._client = genai.Client(api_key=self.config.api_key)
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

        from google.genai import errors as genai_errors
        from google.genai import types as genai_types

        gen_config = genai_types.GenerateContentConfig(
            system_instruction=system or None,
            temperature=temperature,
            max_output_tokens=max_tokens,
        )

        try:
            resp = self._sdk().models.generate_content(
                model=self.config.model, contents=prompt, config=gen_config
            )
        except genai_errors.APIError as e:
            log.error(f"Gemini request failed (model={self.config.model}): {e}")
            raise UpstreamError(f"Gemini request failed: {e}") from e

        try:
            text = resp.text
        except (AttributeError, ValueError) as e:
            raise UpstreamError(f"Malformed Gemini response: {e}") from e

        if not text or not text.strip():
            raise EmptyResponseError("Gemini returned an empty response")
        return text
