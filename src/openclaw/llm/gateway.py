from __future__ import annotations

from typing import Any

from openclaw import logger as logger_mod

from ._json import extract_candidate, try_parse
from .base import LLMClient
from .errors import EmptyResponseError, UnparseableOutputError
from .types import JSON_ONLY_SYSTEM, GenerationRequest

log = logger_mod.get_logger()

REPAIR_PREFIX = (
    "Convert the following content to STRICT valid JSON. Output ONLY JSON.\n"
    "If it contains multiple things, preserve all information in JSON.\n\n"
)

# Sampling per call kind. Only backends that honour temperature use these.
GENERATE_TEMPERATURE = 0.4
REPAIR_TEMPERATURE = 0.1
CHAT_TEMPERATURE = 0.7
JSON_MAX_TOKENS = 900
CHAT_MAX_TOKENS = 800


class Gateway:
    """Uniform entry point over the one configured generation backend.

    `generate_structured` makes at most two backend calls: the generation
    itself and, when its output does not parse, a single repair pass through
    the same backend.
    """

    def __init__(self, llm: LLMClient):
        self._llm = llm

    @property
    def llm(self) -> LLMClient:
        return self._llm

    def warn_if_unconfigured(self) -> bool:
        """Log a warning when the active backend has no credential yet."""
        if self._llm.has_credentials():
            return False
        log.warning(
            f"AI provider '{self._llm.name}' has no credential configured "
            f"({self._llm.config.api_key_env}); AI commands will fail until it is set."
        )
        return True

    def _repair(self, raw_text: str) -> str:
        return self._llm.generate(
            REPAIR_PREFIX + raw_text,
            system=JSON_ONLY_SYSTEM,
            temperature=REPAIR_TEMPERATURE,
            max_tokens=JSON_MAX_TOKENS,
        )

    @staticmethod
    def _structured(text: str) -> Any:
        # Only objects and arrays count; bare scalars go to repair.
        parsed = try_parse(extract_candidate(text))
        return parsed if isinstance(parsed, (dict, list)) else None

    def generate_structured(self, task: str, schema_hint: str | None = None) -> Any:
        request = GenerationRequest(task=task, schema_hint=schema_hint)
        raw = self._llm.generate(
            request.to_prompt(),
            system=JSON_ONLY_SYSTEM,
            temperature=GENERATE_TEMPERATURE,
            max_tokens=JSON_MAX_TOKENS,
        )

        parsed = self._structured(raw)
        if parsed is not None:
            return parsed

        log.warning(
            f"{self._llm.name} output was not valid JSON; attempting one repair pass"
        )
        try:
            repaired = self._repair(raw)
        except EmptyResponseError:
            repaired = ""
        parsed = self._structured(repaired)
        if parsed is not None:
            return parsed

        log.error(f"{self._llm.name} output still not valid JSON after repair")
        raise UnparseableOutputError("AI did not return valid JSON", raw_text=repaired)

    def generate_freeform(self, system_prompt: str, user_context: str) -> str:
        return self._llm.generate(
            user_context,
            system=system_prompt,
            temperature=CHAT_TEMPERATURE,
            max_tokens=CHAT_MAX_TOKENS,
        )
