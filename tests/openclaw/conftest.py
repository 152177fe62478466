from __future__ import annotations

from pathlib import Path

import pytest

from openclaw.config import GitHubTarget, Settings
from openclaw.dev import BotSession
from openclaw.handlers import HandlerContext
from openclaw.llm import Gateway
from openclaw.llm.base import LLMConfig


class FakeLLM:
    """Scripted backend: each generate() call pops the next reply.

    A reply that is an exception instance is raised instead of returned.
    """

    name = "fake"

    def __init__(self, replies=None, *, api_key: str = "k"):
        self.config = LLMConfig(
            provider="fake", model="fake-1", api_key=api_key, api_key_env="FAKE_KEY"
        )
        self.replies = list(replies or [])
        self.calls: list[dict] = []

    def has_credentials(self) -> bool:
        return bool(self.config.api_key)

    def generate(self, prompt, *, system=None, temperature=None, max_tokens=None):
        self.calls.append(
            {
                "prompt": prompt,
                "system": system,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        if not self.replies:
            raise AssertionError("FakeLLM ran out of scripted replies")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeRecords:
    def __init__(self):
        self.rows: list[tuple[str, list]] = []
        self.best_effort: list[tuple[str, list]] = []

    def append_row(self, table, values):
        self.rows.append((table, list(values)))

    def append_row_if_ready(self, table, values):
        self.best_effort.append((table, list(values)))
        return True


class FakePublisher:
    def __init__(self, owner="acme", repo="site"):
        self.files: dict[str, str] = {}
        self.messages: list[str] = []
        self.configured = True
        self.repo_url = f"https://github.com/{owner}/{repo}"

    def require_configured(self):
        if not self.configured:
            from openclaw.errors import MissingCredentialError

            raise MissingCredentialError("Missing required environment variable: GITHUB_TOKEN")

    def upsert_file(self, path, content, message):
        self.files[path] = content
        self.messages.append(message)


@pytest.fixture
def fake_llm():
    def _factory(replies=None, **kwargs):
        return FakeLLM(replies, **kwargs)

    return _factory


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        ai_system_prompt="Be brief.",
        pages=GitHubTarget("GITHUB", token="t", owner="acme", repo="site"),
        code=GitHubTarget("CODE_GITHUB", token="t", owner="acme", repo="bot"),
        dev_allowlist=("handlers.py", "pyproject.toml"),
        project_root=tmp_path,
    )


@pytest.fixture
def make_ctx(settings):
    """Factory: HandlerContext over a scripted backend and in-memory sinks."""

    def _factory(replies=None, **overrides):
        llm = FakeLLM(replies)
        ctx = HandlerContext(
            settings=overrides.pop("settings", settings),
            gateway=Gateway(llm),
            records=FakeRecords(),
            pages=FakePublisher(),
            code=FakePublisher(repo="bot"),
            session=BotSession(),
        )
        ctx.llm = llm  # type: ignore[attr-defined]
        return ctx

    return _factory


class _Exec:
    def __init__(self, fn):
        self._fn = fn

    def execute(self):
        return self._fn()


class FakeSheetsService:
    def __init__(self, titles=("Sheet1",)):
        self.calls = []
        self._meta = {
            "sheets": [
                {"properties": {"title": t, "sheetId": i}} for i, t in enumerate(titles)
            ]
        }
        self.values_store = {}

    def spreadsheets(self):
        service = self

        class _Spreadsheets:
            def get(self, spreadsheetId, fields=None):
                service.calls.append(("get", spreadsheetId, fields))
                return _Exec(lambda: service._meta)

            def batchUpdate(self, spreadsheetId, body):
                service.calls.append(("batchUpdate", spreadsheetId, body))
                return _Exec(lambda: {"ok": True, "body": body})

            def values(self):
                class _Values:
                    def update(self, spreadsheetId, range, valueInputOption, body):
                        service.calls.append(
                            ("values.update", spreadsheetId, range, valueInputOption)
                        )
                        service.values_store[range] = body.get("values", [])
                        return _Exec(lambda: {"updated": True})

                    def append(
                        self,
                        spreadsheetId,
                        range,
                        valueInputOption,
                        insertDataOption,
                        body,
                    ):
                        service.calls.append(
                            (
                                "values.append",
                                spreadsheetId,
                                range,
                                valueInputOption,
                                insertDataOption,
                            )
                        )
                        service.values_store.setdefault(range, []).extend(
                            body.get("values", [])
                        )
                        return _Exec(lambda: {"appended": True})

                return _Values()

        return _Spreadsheets()


@pytest.fixture
def fake_sheets_service():
    """Factory for an in-memory Sheets service exposing the discovery call shape."""

    def _factory(titles=("Sheet1",)):
        return FakeSheetsService(titles)

    return _factory
