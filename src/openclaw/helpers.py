import datetime
import re
from typing import Any, Mapping

from openclaw import config


def now_iso() -> str:
    """Current UTC time as ISO-8601, used for `created_at` columns."""
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


def truncate_message(
    text: Any,
    limit: int = config.MAX_MESSAGE_LENGTH,
    marker: str = config.TRUNCATION_MARKER,
) -> str:
    """Clamp an outbound chat message to `limit` characters.

    When the text is too long the result ends with `marker` and is exactly
    `limit` characters long.
    """
    s = "" if text is None else str(text)
    if len(s) <= limit:
        return s
    if len(marker) >= limit:
        return marker[:limit]
    return s[: limit - len(marker)] + marker


def slugify(v: Any) -> str:
    """
    Lowercase URL slug.

    Rules:
    - Runs of anything outside [a-z0-9] become a single dash
    - Leading / trailing dashes are removed
    - At most 60 characters
    """
    s = str(v or "").lower()
    s = re.sub(r"[^a-z0-9]+", "-", s)
    s = re.sub(r"^-+|-+$", "", s)
    return s[:60]


def field(data: Mapping[str, Any] | None, key: str, default: Any = "") -> Any:
    """Read one generated field; missing or empty values become `default`."""
    if not isinstance(data, Mapping):
        return default
    value = data.get(key)
    if value is None or value == "":
        return default
    return value


def as_mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> list:
    return value if isinstance(value, list) else []
