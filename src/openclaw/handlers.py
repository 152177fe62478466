"""Chat command handlers.

Handlers are transport-independent: each takes the shared `HandlerContext`
and one `Incoming` message and returns the reply text. Errors propagate to
the caller, which reports them to the chat.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from typing import Callable

from openclaw import logger as log
from openclaw.config import Settings
from openclaw.dev import (
    BotSession,
    DevProposal,
    diff_proposal,
    filter_allowlisted,
    read_local_file,
    summarize_proposal,
    write_local_file,
)
from openclaw.errors import EmptyProposalError, MissingCredentialError
from openclaw.github import GitHubContents, pages_base_url
from openclaw.helpers import as_list, as_mapping, field as get_field, now_iso, slugify
from openclaw.landing import render_landing_html, render_redirect_html
from openclaw.llm import Gateway
from openclaw.llm.errors import EmptyResponseError, LLMError
from openclaw.records import RecordStore
from openclaw.utm import build_utm_url

log = log.get_logger()

MAX_HYPOTHESES = 30
MAX_UTM_ITEMS = 10
NO_REPLY_FALLBACK = "Could not get a reply from the AI."

HELP_TEXT = (
    "Hi. I'm OpenClaw, an AI assistant. Just send a message and I'll answer.\n\n"
    "Commands:\n"
    "/offer_add <link or description>\n"
    "/hypotheses_generate [vertical]\n"
    "/content_pack <topic>\n"
    "/landing_create <topic> | /landing_create <redirect_url> | <topic>\n"
    "/utm_create <base_url> [notes]\n"
    "/dev_request <change>, /dev_diff, /dev_apply, /dev_bootstrap\n"
    "/my_id"
)


@dataclass
class HandlerContext:
    settings: Settings
    gateway: Gateway
    records: RecordStore
    pages: GitHubContents
    code: GitHubContents
    session: BotSession = field(default_factory=BotSession)


@dataclass(frozen=True)
class Incoming:
    """What a handler needs from one chat message."""

    arg: str = ""
    user_id: int | None = None
    username: str = ""
    chat_id: int | None = None


# ---------------------------------------------------------------------------
# General
# ---------------------------------------------------------------------------


def handle_help(ctx: HandlerContext, msg: Incoming) -> str:
    return HELP_TEXT


def handle_my_id(ctx: HandlerContext, msg: Incoming) -> str:
    return str(msg.user_id or "")


def handle_chat(ctx: HandlerContext, msg: Incoming) -> str:
    user_context = (
        f"User: {msg.username or 'unknown'}\n"
        f"ChatId: {msg.chat_id}\n\n"
        f"Message: {msg.arg}"
    )
    try:
        return ctx.gateway.generate_freeform(
            ctx.settings.ai_system_prompt, user_context
        )
    except EmptyResponseError:
        log.warning("Empty chat reply from AI")
        return NO_REPLY_FALLBACK


# ---------------------------------------------------------------------------
# Record store commands
# ---------------------------------------------------------------------------


def handle_offer_add(ctx: HandlerContext, msg: Incoming) -> str:
    raw = msg.arg.strip()
    if not raw:
        return "Usage: /offer_add <link or description>"

    offer = as_mapping(
        ctx.gateway.generate_structured(
            "Extract an affiliate/partner offer from the following text/link and "
            "normalize fields. If unknown, use empty string. Vertical must be one "
            "of: B2B, Mobile apps, iGaming. Geo should be short like US, UK, WW. "
            "Allowed_sources is comma-separated.",
            '{"source_url":"","network":"","offer_name":"","vertical":"","geo":"",'
            '"payout":"","currency":"","allowed_sources":"","restrictions":"",'
            '"notes":""}\nInput: ' + raw,
        )
    )

    ctx.records.append_row(
        "Offers",
        [
            now_iso(),
            get_field(offer, "source_url"),
            get_field(offer, "network"),
            get_field(offer, "offer_name"),
            get_field(offer, "vertical"),
            get_field(offer, "geo"),
            get_field(offer, "payout"),
            get_field(offer, "currency"),
            get_field(offer, "allowed_sources"),
            get_field(offer, "restrictions"),
            "new",
            get_field(offer, "notes"),
        ],
    )
    return "Added to Offers sheet: " + str(get_field(offer, "offer_name", "(no name)"))


def handle_hypotheses_generate(ctx: HandlerContext, msg: Incoming) -> str:
    vertical = msg.arg.strip() or "B2B"

    data = as_mapping(
        ctx.gateway.generate_structured(
            f"Generate 12 growth/affiliate hypotheses for vertical={vertical} "
            "targeting EN market. Each hypothesis should include platform in "
            "[X, LinkedIn, TikTok, Telegram] and a clear angle and audience. "
            "Keep them whitehat.",
            '{"items":[{"offer_name":"","platform":"","audience":"","angle":"",'
            '"content_type":"","priority":"low|medium|high","notes":""}]}',
        )
    )
    items = as_list(data.get("items"))
    if not items:
        raise LLMError("No hypotheses returned by AI")

    kept = items[:MAX_HYPOTHESES]
    for it in kept:
        ctx.records.append_row(
            "Hypotheses",
            [
                now_iso(),
                get_field(it, "offer_name"),
                get_field(it, "platform"),
                get_field(it, "audience"),
                get_field(it, "angle"),
                get_field(it, "content_type"),
                "new",
                get_field(it, "priority", "medium"),
                get_field(it, "notes"),
            ],
        )
    return f"Added {len(kept)} hypotheses to sheet ({vertical})."


CONTENT_FORMATS = (("x", "X"), ("linkedin", "LinkedIn"), ("tiktok", "TikTok"))


def handle_content_pack(ctx: HandlerContext, msg: Incoming) -> str:
    topic = msg.arg.strip()
    if not topic:
        return "Usage: /content_pack <topic or angle>"

    variant = '{"hook":"","primary_text":"","cta":"","landing_outline":""}'
    pack = as_mapping(
        ctx.gateway.generate_structured(
            "Create an EN content pack for affiliate/growth testing. Return "
            "variants for X, LinkedIn, TikTok. Keep it whitehat and professional. "
            "Provide hook, body, cta, and a short landing outline.",
            f'{{"x":{variant},"linkedin":{variant},"tiktok":{variant}}}\nTopic: {topic}',
        )
    )

    for key, name in CONTENT_FORMATS:
        v = as_mapping(pack.get(key))
        ctx.records.append_row(
            "Creatives",
            [
                now_iso(),
                topic,
                name,
                get_field(v, "hook"),
                get_field(v, "primary_text"),
                get_field(v, "cta"),
                get_field(v, "landing_outline"),
                "",
            ],
        )
    return "Content pack generated and saved to Creatives (X/LinkedIn/TikTok)."


# ---------------------------------------------------------------------------
# Publishing commands
# ---------------------------------------------------------------------------


def parse_landing_arg(raw: str) -> tuple[str, str]:
    """Split `<redirect_url> | <topic>`; returns (redirect_url, topic)."""

    parts = [p.strip() for p in raw.split("|") if p.strip()]
    if len(parts) >= 2:
        return parts[0], " | ".join(parts[1:])
    return "", raw


def handle_landing_create(ctx: HandlerContext, msg: Incoming) -> str:
    raw = msg.arg.strip()
    if not raw:
        return (
            "Usage: /landing_create <topic> OR /landing_create <redirect_url> | <topic>"
        )
    redirect_url, topic = parse_landing_arg(raw)

    ctx.pages.require_configured()
    base_url = pages_base_url(ctx.settings)
    if not base_url:
        raise MissingCredentialError("GitHub Pages base URL is not configured")

    data = as_mapping(
        ctx.gateway.generate_structured(
            "Generate a simple, compliant EN landing page content for organic "
            "testing. Avoid prohibited claims. Keep it suitable for B2B/Mobile "
            "apps. Return short punchy copy.",
            '{"title":"","headline":"","subheadline":"","bullets":[""],'
            '"cta_text":"","disclaimer":""}\nTopic: ' + topic,
        )
    )

    slug = slugify(f"{topic}-{int(time.time() * 1000)}")
    cta_url = f"{base_url}/go/{slug}" if redirect_url else base_url
    page = render_landing_html(
        title=get_field(data, "title", "Landing"),
        headline=get_field(data, "headline", topic),
        subheadline=get_field(data, "subheadline"),
        bullets=as_list(data.get("bullets")),
        cta_text=get_field(data, "cta_text", "Learn more"),
        cta_url=cta_url,
        disclaimer=get_field(
            data, "disclaimer", "This page is for informational purposes only."
        ),
    )

    ctx.pages.upsert_file(f"landings/{slug}/index.html", page, f"Add landing {slug}")
    if redirect_url:
        ctx.pages.upsert_file(
            f"go/{slug}.html",
            render_redirect_html(redirect_url),
            f"Add redirect {slug}",
        )

    landing_url = f"{base_url}/landings/{slug}/"
    ctx.records.append_row(
        "Landings",
        [
            now_iso(),
            topic,
            slug,
            landing_url,
            "published",
            f"redirect_url={redirect_url}" if redirect_url else "",
        ],
    )
    return f"Landing published: {landing_url}"


def handle_utm_create(ctx: HandlerContext, msg: Incoming) -> str:
    raw = msg.arg.strip()
    if not raw:
        return "Usage: /utm_create <base_url or landing_url> [optional notes]"

    data = as_mapping(
        ctx.gateway.generate_structured(
            "Create 3 UTM templates for organic posting on X, LinkedIn, TikTok. "
            "Return items with utm_source/utm_medium/utm_campaign/utm_content. "
            "utm_campaign should be short slug-like.",
            '{"base_url":"","items":[{"utm_source":"","utm_medium":"",'
            '"utm_campaign":"","utm_content":""}]}\nInput: ' + raw,
        )
    )

    base_url = str(get_field(data, "base_url", raw)).strip()
    items = as_list(data.get("items"))
    if not items:
        raise LLMError("No UTM items returned by AI")

    for it in items[:MAX_UTM_ITEMS]:
        it = as_mapping(it)
        ctx.records.append_row(
            "UTM_Templates",
            [
                now_iso(),
                base_url,
                get_field(it, "utm_source"),
                get_field(it, "utm_medium"),
                get_field(it, "utm_campaign"),
                get_field(it, "utm_content"),
                build_utm_url(base_url, it),
                "",
            ],
        )
    return "UTM templates saved to sheet: UTM_Templates"


# ---------------------------------------------------------------------------
# Self-modification: proposal -> diff review -> apply
# ---------------------------------------------------------------------------


def handle_dev_bootstrap(ctx: HandlerContext, msg: Incoming) -> str:
    ctx.code.require_configured()
    root = ctx.settings.project_root
    for name in ctx.settings.dev_allowlist:
        ctx.code.upsert_file(name, read_local_file(root, name), f"Bootstrap {name}")
    return f"Bootstrapped code repo: {ctx.code.repo_url}"


def handle_dev_request(ctx: HandlerContext, msg: Incoming) -> str:
    req = msg.arg.strip()
    if not req:
        return "Usage: /dev_request <what to change>"

    root = ctx.settings.project_root
    allowlist = ctx.settings.dev_allowlist
    current = {name: read_local_file(root, name) for name in allowlist}

    hint_files = ",".join(f'"{name}":"<full file text>"' for name in allowlist)
    listing = "\n\n".join(f"Current {name}:\n{text}" for name, text in current.items())
    payload = as_mapping(
        ctx.gateway.generate_structured(
            "You are implementing changes in a Python Telegram bot project. "
            "Return a JSON object with updated file contents for an allowlist of "
            "files only. You MUST preserve all existing functionality unless asked. "
            "Never include secrets; never add code that prints environment "
            f"variables. Allowed files: {', '.join(allowlist)}.",
            f'{{"reason":"","files":{{{hint_files}}}}}\n'
            f"Request: {req}\n\n{listing}",
        )
    )

    files = filter_allowlisted(as_mapping(payload.get("files")), allowlist)
    reason = str(get_field(payload, "reason", req))
    ctx.session.stage(DevProposal(reason=reason, files=files))

    ctx.records.append_row_if_ready(
        "Tasks",
        [now_iso(), "dev_proposal", reason, json.dumps({"files": list(files)}), "pending", ""],
    )
    return "Dev proposal prepared. Use /dev_diff then /dev_apply."


def handle_dev_diff(ctx: HandlerContext, msg: Incoming) -> str:
    proposal = ctx.session.pending
    if proposal is None:
        return "No pending dev proposal. Use /dev_request first."
    summary = summarize_proposal(proposal)
    diff = diff_proposal(proposal, ctx.settings.project_root)
    return f"{summary}\n\n{diff}" if diff else f"{summary}\n\n(no changes)"


def handle_dev_apply(ctx: HandlerContext, msg: Incoming) -> str:
    proposal = ctx.session.pending
    if proposal is None:
        raise EmptyProposalError("No pending dev proposal. Use /dev_request first.")

    ctx.code.require_configured()
    allowed = set(ctx.settings.dev_allowlist)
    root = ctx.settings.project_root

    files = {name: content for name, content in proposal.files.items() if name in allowed}
    for name, content in files.items():
        if not content.strip():
            raise ValueError(f"Refusing to write empty file: {name}")

    for name, content in files.items():
        ctx.code.upsert_file(name, content, f"Apply update to {name}")
        write_local_file(root, name, content)

    ctx.records.append_row_if_ready(
        "Tasks",
        [
            now_iso(),
            "dev_apply",
            proposal.reason or "apply",
            json.dumps({"files": list(files)}),
            "done",
            "restart_required",
        ],
    )
    ctx.session.clear()
    return "Update applied. Please restart the bot."


Handler = Callable[[HandlerContext, Incoming], str]

# command -> (handler, show "typing" while it runs)
COMMANDS: dict[str, tuple[Handler, bool]] = {
    "my_id": (handle_my_id, False),
    "offer_add": (handle_offer_add, True),
    "hypotheses_generate": (handle_hypotheses_generate, True),
    "content_pack": (handle_content_pack, True),
    "landing_create": (handle_landing_create, True),
    "utm_create": (handle_utm_create, True),
    "dev_bootstrap": (handle_dev_bootstrap, True),
    "dev_request": (handle_dev_request, True),
    "dev_diff": (handle_dev_diff, False),
    "dev_apply": (handle_dev_apply, True),
}
