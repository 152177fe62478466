from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from .errors import MissingCredentialError

# Load from .env if it exists (useful for local development)
load_dotenv()


def get_optional_env(name: str, fallback: str = "") -> str:
    """Return the env var, or `fallback` when it is unset or blank."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return fallback
    return value


def require_any_env(names: list[str] | tuple[str, ...]) -> str:
    for name in names:
        value = os.getenv(name)
        if value and value.strip():
            return value
    raise MissingCredentialError(
        f"Missing required environment variable (any of): {', '.join(names)}"
    )


def _parse_user_ids(raw: str) -> tuple[int, ...]:
    ids: list[int] = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            ids.append(int(part))
        except ValueError:
            continue
    return tuple(ids)


def _parse_list(raw: str) -> tuple[str, ...]:
    return tuple(p.strip() for p in raw.split(",") if p.strip())


LOGGING_LEVEL = get_optional_env("LOGGING_LEVEL", "INFO").upper()

TELEGRAM_TOKEN_ENV = ("TELEGRAM_BOT_TOKEN", "TELEGRAM_TOKEN", "BOT_TOKEN")

DEFAULT_AI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_AI_MODEL = "gpt-4o-mini"
DEFAULT_ANTHROPIC_MODEL = "claude-3-5-sonnet-20241022"
DEFAULT_GEMINI_MODEL = "gemini-flash-latest"
DEFAULT_SYSTEM_PROMPT = (
    "You are OpenClaw, a helpful AI assistant. Answer briefly and to the point."
)
DEFAULT_DEV_ALLOWLIST = ("src/openclaw/handlers.py", "pyproject.toml")

# Chat transport
MAX_MESSAGE_LENGTH = 3800
TRUNCATION_MARKER = "\n\n[message truncated]"


@dataclass(frozen=True)
class GitHubTarget:
    """One GitHub repository used through the contents API."""

    env_prefix: str
    token: str = ""
    owner: str = ""
    repo: str = ""
    branch: str = "main"

    @classmethod
    def from_env(cls, prefix: str) -> "GitHubTarget":
        return cls(
            env_prefix=prefix,
            token=get_optional_env(f"{prefix}_TOKEN"),
            owner=get_optional_env(f"{prefix}_OWNER"),
            repo=get_optional_env(f"{prefix}_REPO"),
            branch=get_optional_env(f"{prefix}_BRANCH", "main"),
        )


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, read once at startup."""

    ai_provider: str = "openai"
    ai_api_key: str = ""
    ai_base_url: str = DEFAULT_AI_BASE_URL
    ai_model: str = DEFAULT_AI_MODEL
    anthropic_api_key: str = ""
    anthropic_model: str = DEFAULT_ANTHROPIC_MODEL
    gemini_api_key: str = ""
    gemini_model: str = DEFAULT_GEMINI_MODEL
    ai_system_prompt: str = DEFAULT_SYSTEM_PROMPT

    google_sheet_id: str = ""
    google_service_account_json_b64: str = ""

    pages: GitHubTarget = field(default_factory=lambda: GitHubTarget("GITHUB"))
    pages_base_url: str = ""
    code: GitHubTarget = field(default_factory=lambda: GitHubTarget("CODE_GITHUB"))

    allowed_user_ids: tuple[int, ...] = ()
    dev_allowlist: tuple[str, ...] = DEFAULT_DEV_ALLOWLIST
    project_root: Path = field(default_factory=Path.cwd)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            ai_provider=get_optional_env("AI_PROVIDER", "openai").lower(),
            ai_api_key=get_optional_env("AI_API_KEY"),
            ai_base_url=get_optional_env("AI_BASE_URL", DEFAULT_AI_BASE_URL),
            ai_model=get_optional_env("AI_MODEL", DEFAULT_AI_MODEL),
            anthropic_api_key=get_optional_env("ANTHROPIC_API_KEY"),
            anthropic_model=get_optional_env(
                "ANTHROPIC_MODEL", DEFAULT_ANTHROPIC_MODEL
            ),
            gemini_api_key=get_optional_env("GEMINI_API_KEY"),
            gemini_model=get_optional_env("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
            ai_system_prompt=get_optional_env(
                "AI_SYSTEM_PROMPT", DEFAULT_SYSTEM_PROMPT
            ),
            google_sheet_id=get_optional_env("GOOGLE_SHEET_ID"),
            google_service_account_json_b64=get_optional_env(
                "GOOGLE_SERVICE_ACCOUNT_JSON_B64"
            ),
            pages=GitHubTarget.from_env("GITHUB"),
            pages_base_url=get_optional_env("GITHUB_PAGES_BASE_URL"),
            code=GitHubTarget.from_env("CODE_GITHUB"),
            allowed_user_ids=_parse_user_ids(
                get_optional_env("TELEGRAM_ALLOWED_USER_IDS")
            ),
            dev_allowlist=_parse_list(get_optional_env("DEV_ALLOWLIST"))
            or DEFAULT_DEV_ALLOWLIST,
            project_root=Path(get_optional_env("DEV_PROJECT_ROOT", os.getcwd())),
        )


def telegram_token() -> str:
    return require_any_env(TELEGRAM_TOKEN_ENV)
