from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping

from openclaw import logger as log
from openclaw.errors import NoAllowlistedFilesError
from openclaw.helpers import now_iso

log = log.get_logger()


@dataclass(frozen=True)
class DevProposal:
    """A staged replacement for one or more allowlisted source files."""

    reason: str
    files: dict[str, str]
    created_at: str = field(default_factory=now_iso)


@dataclass
class BotSession:
    """Per-process state shared by handlers.

    Holds a single pending proposal; a new request overwrites it.
    """

    pending: DevProposal | None = None

    def stage(self, proposal: DevProposal) -> None:
        if self.pending is not None:
            log.info("Replacing pending dev proposal")
        self.pending = proposal

    def clear(self) -> None:
        self.pending = None


def filter_allowlisted(
    files: Mapping[str, Any] | None, allowlist: Iterable[str]
) -> dict[str, str]:
    """Keep only allowlisted filenames. Raises when nothing is left."""

    allowed = set(allowlist)
    out: dict[str, str] = {}
    for name, content in (files or {}).items():
        if name in allowed:
            out[name] = "" if content is None else str(content)
        else:
            log.warning(f"Dropping non-allowlisted file from dev proposal: {name}")
    if not out:
        raise NoAllowlistedFilesError("Dev request returned no allowlisted files")
    return out


def resolve_local_path(root: Path, rel: str) -> Path:
    """Resolve `rel` under `root`, refusing anything that escapes it."""

    base = Path(root).resolve()
    target = (base / rel).resolve()
    if target != base and base not in target.parents:
        raise ValueError(f"Path escapes project root: {rel}")
    return target


def read_local_file(root: Path, rel: str) -> str:
    return resolve_local_path(root, rel).read_text(encoding="utf-8")


def write_local_file(root: Path, rel: str, content: str) -> None:
    resolve_local_path(root, rel).write_text(content, encoding="utf-8")


def summarize_proposal(p: DevProposal) -> str:
    names = list(p.files)
    lines = [
        f"Reason: {p.reason or '(none)'}",
        f"Files: {', '.join(names) or '(none)'}",
    ]
    for name in names:
        lines.append(f"{name}: {len(p.files[name] or '')} chars")
    return "\n".join(lines)


def diff_proposal(p: DevProposal, root: Path) -> str:
    """Unified diff of every staged file against its current local copy."""

    chunks: list[str] = []
    for name, new in p.files.items():
        try:
            old = read_local_file(root, name)
        except FileNotFoundError:
            old = ""
        chunks.extend(
            difflib.unified_diff(
                old.splitlines(keepends=True),
                new.splitlines(keepends=True),
                fromfile=f"a/{name}",
                tofile=f"b/{name}",
            )
        )
    return "".join(chunks)
