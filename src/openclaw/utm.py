from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import quote

from openclaw.helpers import field

UTM_KEYS = ("utm_source", "utm_medium", "utm_campaign", "utm_content")

# Characters encodeURIComponent leaves alone
_SAFE = "-_.!~*'()"


def build_utm_url(base_url: str, item: Mapping[str, Any]) -> str:
    """Append the four utm_* parameters to `base_url`, keeping its query."""

    sep = "&" if "?" in base_url else "?"
    query = "&".join(
        f"{key}={quote(str(field(item, key)), safe=_SAFE)}" for key in UTM_KEYS
    )
    return f"{base_url}{sep}{query}"
