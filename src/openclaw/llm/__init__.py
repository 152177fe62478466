"""LLM provider abstractions (OpenAI-compatible / Anthropic / Gemini).

Design goals:
- Keep provider-specific SDKs isolated behind one `generate` call.
- Turn free-form model output into parsed JSON, with a single repair pass.
"""

from ._json import extract_candidate, try_parse
from .factory import build_llm, resolve_provider
from .gateway import Gateway
from .types import GenerationRequest

__all__ = [
    "Gateway",
    "GenerationRequest",
    "build_llm",
    "extract_candidate",
    "resolve_provider",
    "try_parse",
]
