from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class LLMConfig:
    provider: str
    model: str
    api_key: str = ""
    api_key_env: str = ""
    base_url: str | None = None


class LLMClient(Protocol):
    """Small interface every generation backend implements.

    One call to `generate` is exactly one request to the backend. Credentials
    are checked at call time, not at construction, so an unused provider may
    stay unconfigured.
    """

    name: str
    config: LLMConfig

    def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        raise NotImplementedError

    def has_credentials(self) -> bool:
        raise NotImplementedError
