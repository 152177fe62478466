"""Telegram transport: wires chat updates to the command handlers."""

from __future__ import annotations

import asyncio
from typing import Iterable

from telegram import Update
from telegram.constants import ChatAction
from telegram.ext import (
    Application,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from openclaw import config
from openclaw import logger as log
from openclaw.config import Settings
from openclaw.github import GitHubContents
from openclaw.handlers import (
    COMMANDS,
    Handler,
    HandlerContext,
    Incoming,
    handle_chat,
    handle_help,
)
from openclaw.helpers import truncate_message
from openclaw.llm import Gateway, build_llm
from openclaw.records import RecordStore

log = log.get_logger()

CONTEXT_KEY = "openclaw"


def command_argument(text: str | None) -> str:
    """Everything after the command token, newlines preserved."""

    parts = (text or "").strip().split(maxsplit=1)
    if len(parts) < 2:
        return ""
    return parts[1].strip()


def is_allowed_user(user_id: int | None, allowed_ids: Iterable[int]) -> bool:
    allowed = tuple(allowed_ids)
    if not allowed:
        return True
    return isinstance(user_id, int) and user_id in allowed


def error_reply(err: BaseException) -> str:
    return truncate_message(f"Error: {err}")


def _incoming(update: Update, arg: str) -> Incoming:
    user = update.effective_user
    chat = update.effective_chat
    return Incoming(
        arg=arg,
        user_id=user.id if user else None,
        username=(user.username or user.first_name or "") if user else "",
        chat_id=chat.id if chat else None,
    )


async def run_handler(
    update: Update,
    context: ContextTypes.DEFAULT_TYPE,
    name: str,
    handler: Handler,
    arg: str,
    *,
    typing: bool = True,
    check_user: bool = True,
    disable_preview: bool = False,
) -> None:
    """Run one handler to completion and send its reply.

    Every exception ends up in the chat as an error message.
    """

    message = update.effective_message
    if message is None:
        return
    ctx: HandlerContext = context.application.bot_data[CONTEXT_KEY]
    msg = _incoming(update, arg)

    if check_user and not is_allowed_user(msg.user_id, ctx.settings.allowed_user_ids):
        log.info(f"Ignoring {name} from non-allowlisted user {msg.user_id}")
        return

    try:
        if typing:
            await context.bot.send_chat_action(message.chat_id, ChatAction.TYPING)
        reply = await asyncio.to_thread(handler, ctx, msg)
    except Exception as err:  # noqa: BLE001
        log.error(f"{name} error: {err}")
        await message.reply_text(error_reply(err))
        return

    await message.reply_text(
        truncate_message(reply), disable_web_page_preview=disable_preview
    )


def _command_callback(name: str, handler: Handler, typing: bool):
    async def _callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        text = update.effective_message.text if update.effective_message else ""
        await run_handler(
            update, context, f"/{name}", handler, command_argument(text), typing=typing
        )

    return _callback


async def on_help(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await run_handler(
        update, context, "/help", handle_help, "", typing=False, check_user=False
    )


async def on_text(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    message = update.effective_message
    if message is None or not message.text or message.text.startswith("/"):
        return
    await run_handler(
        update, context, "chat", handle_chat, message.text, disable_preview=True
    )


async def on_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    log.error(f"Telegram error: {context.error}")


def build_context(settings: Settings) -> HandlerContext:
    gateway = Gateway(build_llm(settings))
    gateway.warn_if_unconfigured()

    try:
        records = RecordStore.from_settings(settings)
        records.initialize()
    except Exception as e:  # noqa: BLE001
        log.error(f"Google Sheets init error: {e}")
        records = RecordStore(None)

    return HandlerContext(
        settings=settings,
        gateway=gateway,
        records=records,
        pages=GitHubContents(settings.pages, label="GitHub"),
        code=GitHubContents(settings.code, label="Code GitHub"),
    )


def build_application(token: str, ctx: HandlerContext) -> Application:
    app = Application.builder().token(token).build()
    app.bot_data[CONTEXT_KEY] = ctx

    app.add_handler(CommandHandler(["start", "help"], on_help))
    for name, (handler, typing) in COMMANDS.items():
        app.add_handler(CommandHandler(name, _command_callback(name, handler, typing)))
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, on_text))
    app.add_error_handler(on_error)
    return app


def main() -> None:
    token = config.telegram_token()
    settings = Settings.from_env()
    app = build_application(token, build_context(settings))
    log.info("OpenClaw started. Polling Telegram updates...")
    app.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == "__main__":
    main()
