from __future__ import annotations

import json
import re
from typing import Any

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)


def _bracket_span(s: str, open_ch: str, close_ch: str) -> str | None:
    first = s.find(open_ch)
    last = s.rfind(close_ch)
    if first != -1 and last != -1 and last > first:
        return s[first : last + 1].strip()
    return None


def extract_candidate(raw_text: Any) -> str:
    """Best-effort slice of model output that most likely holds the JSON.

    Rules, first match wins:
    1. interior of the first ``` fence (optionally tagged json)
    2. first "{" through last "}"
    3. first "[" through last "]"
    4. the trimmed text itself

    This is a heuristic: text with several unrelated brace pairs can yield
    a span that does not parse. The repair pass covers that case.
    """

    s = str(raw_text or "").strip()
    if not s:
        return ""

    m = _FENCE_RE.search(s)
    if m and m.group(1):
        return m.group(1).strip()

    span = _bracket_span(s, "{", "}")
    if span is not None:
        return span

    span = _bracket_span(s, "[", "]")
    if span is not None:
        return span

    return s


def try_parse(candidate: Any) -> Any | None:
    """Strict JSON parse that never raises.

    Returns None for malformed input, non-string input and a literal `null`.
    """

    if not isinstance(candidate, str) or not candidate:
        return None
    try:
        return json.loads(candidate)
    except (ValueError, RecursionError):
        return None

