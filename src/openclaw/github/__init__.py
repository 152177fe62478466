"""GitHub contents API publishing target (landings and the bot's own source)."""

from .contents import GitHubContents, pages_base_url
from .errors import GitHubAPIError

__all__ = ["GitHubAPIError", "GitHubContents", "pages_base_url"]
