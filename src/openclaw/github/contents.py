from __future__ import annotations

import base64
from typing import Any
from urllib.parse import quote

import requests

from openclaw import logger as log
from openclaw.config import GitHubTarget, Settings
from openclaw.errors import MissingCredentialError

from .errors import GitHubAPIError

log = log.get_logger()

API_ROOT = "https://api.github.com"
API_VERSION = "2022-11-28"


class GitHubContents:
    """Key-addressed upsert of UTF-8 text files through the contents API.

    Each upsert reads the current blob sha first and only sends it when the
    path already exists.
    """

    def __init__(
        self,
        target: GitHubTarget,
        *,
        session: requests.Session | None = None,
        label: str = "GitHub",
    ):
        self.target = target
        self._session = session or requests.Session()
        self._label = label

    def require_configured(self) -> None:
        prefix = self.target.env_prefix
        for suffix, value in (
            ("TOKEN", self.target.token),
            ("OWNER", self.target.owner),
            ("REPO", self.target.repo),
        ):
            if not value:
                raise MissingCredentialError(
                    f"Missing required environment variable: {prefix}_{suffix}"
                )

    @property
    def repo_url(self) -> str:
        return f"https://github.com/{self.target.owner}/{self.target.repo}"

    def _contents_path(self, repo_path: str) -> str:
        owner = quote(self.target.owner, safe="")
        repo = quote(self.target.repo, safe="")
        return f"/repos/{owner}/{repo}/contents/{repo_path.lstrip('/')}"

    def _request(self, method: str, api_path: str, **kwargs: Any) -> Any:
        headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.target.token}",
            "X-GitHub-Api-Version": API_VERSION,
        }
        resp = self._session.request(
            method, f"{API_ROOT}{api_path}", headers=headers, **kwargs
        )

        text = resp.text or ""
        try:
            data = resp.json() if text else None
        except ValueError:
            data = None

        if not resp.ok:
            msg = text
            if isinstance(data, dict) and (data.get("message") or data.get("error")):
                msg = data.get("message") or data.get("error")
            raise GitHubAPIError(resp.status_code, msg, label=self._label)
        return data

    def get_file_sha(self, repo_path: str) -> str | None:
        try:
            data = self._request(
                "GET",
                self._contents_path(repo_path),
                params={"ref": self.target.branch},
            )
        except GitHubAPIError as e:
            if e.status == 404:
                return None
            raise
        if isinstance(data, dict) and data.get("sha"):
            return data["sha"]
        return None

    def upsert_file(self, repo_path: str, content: str, message: str) -> None:
        sha = self.get_file_sha(repo_path)
        body: dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "branch": self.target.branch,
        }
        if sha:
            body["sha"] = sha

        log.info(
            f"{self._label}: {'updating' if sha else 'creating'} "
            f"{self.target.owner}/{self.target.repo}:{repo_path}"
        )
        self._request("PUT", self._contents_path(repo_path), json=body)


def pages_base_url(settings: Settings) -> str:
    """Public base URL for published landings, without a trailing slash."""

    if settings.pages_base_url:
        return settings.pages_base_url.rstrip("/")
    if settings.pages.owner and settings.pages.repo:
        return f"https://{settings.pages.owner}.github.io/{settings.pages.repo}"
    return ""
