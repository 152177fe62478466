from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Union

Role = Literal["system", "user", "assistant"]

# Parsed JSON payload; handlers expect a dict, arrays are tolerated.
StructuredValue = Union[dict[str, Any], list[Any]]

JSON_ONLY_SYSTEM = "Return ONLY valid JSON. No markdown."

STRUCTURED_PREFIX = (
    "You are an expert growth/affiliate operator. Return ONLY valid JSON."
)


@dataclass(frozen=True)
class LLMMessage:
    role: Role
    content: str


@dataclass(frozen=True)
class GenerationRequest:
    """One structured generation task.

    `schema_hint` is pasted into the prompt verbatim. It is a hint for the
    model, never a contract on the output.
    """

    task: str
    schema_hint: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.task, str) or not self.task.strip():
            raise ValueError("GenerationRequest.task must be a non-empty string")

    def to_prompt(self) -> str:
        lines = [STRUCTURED_PREFIX, f"Task: {self.task}"]
        if self.schema_hint:
            lines.append(f"Schema hint: {self.schema_hint}")
        lines.append("No markdown, no explanations.")
        return "\n".join(lines)
