from pathlib import Path

import pytest

from openclaw import config
from openclaw.config import DEFAULT_DEV_ALLOWLIST, Settings
from openclaw.errors import MissingCredentialError

_ENV = [
    "AI_PROVIDER",
    "AI_API_KEY",
    "AI_BASE_URL",
    "AI_MODEL",
    "ANTHROPIC_API_KEY",
    "GEMINI_MODEL",
    "TELEGRAM_ALLOWED_USER_IDS",
    "DEV_ALLOWLIST",
    "DEV_PROJECT_ROOT",
    "GITHUB_TOKEN",
    "GITHUB_OWNER",
    "GITHUB_REPO",
    "GITHUB_BRANCH",
    "CODE_GITHUB_BRANCH",
    "TELEGRAM_BOT_TOKEN",
    "TELEGRAM_TOKEN",
    "BOT_TOKEN",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    s = Settings.from_env()
    assert s.ai_provider == "openai"
    assert s.ai_base_url == "https://api.openai.com/v1"
    assert s.ai_model == "gpt-4o-mini"
    assert s.gemini_model == "gemini-flash-latest"
    assert s.allowed_user_ids == ()
    assert s.dev_allowlist == DEFAULT_DEV_ALLOWLIST
    assert s.pages.branch == "main"
    assert s.code.env_prefix == "CODE_GITHUB"


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("AI_PROVIDER", "Claude")
    monkeypatch.setenv("AI_MODEL", "   ")
    monkeypatch.setenv("TELEGRAM_ALLOWED_USER_IDS", "12, abc, 34,,")
    monkeypatch.setenv("DEV_ALLOWLIST", "bot.py, pyproject.toml")
    monkeypatch.setenv("DEV_PROJECT_ROOT", str(tmp_path))
    monkeypatch.setenv("GITHUB_OWNER", "acme")
    monkeypatch.setenv("CODE_GITHUB_BRANCH", "dev")

    s = Settings.from_env()
    assert s.ai_provider == "claude"
    assert s.ai_model == "gpt-4o-mini"
    assert s.allowed_user_ids == (12, 34)
    assert s.dev_allowlist == ("bot.py", "pyproject.toml")
    assert s.project_root == Path(str(tmp_path))
    assert s.pages.owner == "acme"
    assert s.code.branch == "dev"


def test_require_any_env(monkeypatch):
    with pytest.raises(MissingCredentialError, match="TELEGRAM_BOT_TOKEN, TELEGRAM_TOKEN, BOT_TOKEN"):
        config.telegram_token()
    monkeypatch.setenv("BOT_TOKEN", "123:abc")
    assert config.telegram_token() == "123:abc"


def test_get_optional_env(monkeypatch):
    monkeypatch.setenv("AI_MODEL", "")
    assert config.get_optional_env("AI_MODEL", "fallback") == "fallback"


def test_logger_helpers():
    from openclaw import logger as logger_mod

    log = logger_mod.get_logger()
    assert log is logger_mod.logger
    assert log.name == "openclaw"
    assert callable(logger_mod.info)
    assert callable(logger_mod.error)
