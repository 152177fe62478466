from __future__ import annotations

from typing import Any

from openclaw import logger as log
from openclaw.config import Settings
from openclaw.errors import MissingCredentialError
from openclaw.google import SheetsFacade, build_sheets_service, load_credentials
from openclaw.google.errors import RecordStoreNotReadyError

log = log.get_logger()

# Fixed column schema per table (tab title -> header row)
TABLES: dict[str, list[str]] = {
    "Offers": [
        "created_at",
        "source_url",
        "network",
        "offer_name",
        "vertical",
        "geo",
        "payout",
        "currency",
        "allowed_sources",
        "restrictions",
        "status",
        "notes",
    ],
    "Hypotheses": [
        "created_at",
        "offer_name",
        "platform",
        "audience",
        "angle",
        "content_type",
        "status",
        "priority",
        "notes",
    ],
    "Creatives": [
        "created_at",
        "hypothesis_ref",
        "format",
        "hook",
        "primary_text",
        "cta",
        "landing_outline",
        "notes",
    ],
    "Campaigns": [
        "created_at",
        "platform",
        "offer_name",
        "utm",
        "budget",
        "spend",
        "clicks",
        "conversions",
        "revenue",
        "roi",
        "status",
        "notes",
    ],
    "Landings": ["created_at", "topic", "slug", "url", "status", "notes"],
    "UTM_Templates": [
        "created_at",
        "base_url",
        "utm_source",
        "utm_medium",
        "utm_campaign",
        "utm_content",
        "full_url",
        "notes",
    ],
    "Tasks": ["created_at", "type", "title", "payload", "status", "notes"],
}

NOT_READY_MESSAGE = (
    "Google Sheets is not ready. Set GOOGLE_SHEET_ID and "
    "GOOGLE_SERVICE_ACCOUNT_JSON_B64 and restart."
)


class RecordStore:
    """Append-only tabular sink backed by one Google spreadsheet.

    A store built without a facade is disabled: `append_row` raises and
    `append_row_if_ready` does nothing.
    """

    def __init__(self, sheets: SheetsFacade | None, spreadsheet_id: str = ""):
        self._sheets = sheets
        self._spreadsheet_id = spreadsheet_id
        self._ready = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "RecordStore":
        sheet_id = settings.google_sheet_id
        creds_b64 = settings.google_service_account_json_b64

        if not sheet_id and not creds_b64:
            log.info(
                "Google Sheets integration disabled "
                "(no GOOGLE_SHEET_ID / GOOGLE_SERVICE_ACCOUNT_JSON_B64)."
            )
            return cls(None)
        if not sheet_id:
            raise MissingCredentialError(
                "Missing required environment variable: GOOGLE_SHEET_ID"
            )
        if not creds_b64:
            raise MissingCredentialError(
                "Missing required environment variable: GOOGLE_SERVICE_ACCOUNT_JSON_B64"
            )

        creds = load_credentials(creds_b64)
        return cls(SheetsFacade(build_sheets_service(creds)), sheet_id)

    @property
    def enabled(self) -> bool:
        return self._sheets is not None

    @property
    def ready(self) -> bool:
        return self._ready

    def initialize(self) -> None:
        """Create missing tabs and (re)write every header row."""

        if self._sheets is None:
            return
        self._sheets.ensure_sheets(self._spreadsheet_id, TABLES.keys())
        for title, headers in TABLES.items():
            self._sheets.write_values(self._spreadsheet_id, f"{title}!A1", [headers])
        self._ready = True
        log.info("Google Sheets integration ready.")

    def append_row(self, table: str, values: list[Any]) -> None:
        if self._sheets is None or not self._ready:
            raise RecordStoreNotReadyError(NOT_READY_MESSAGE)
        if table not in TABLES:
            raise ValueError(f"Unknown table: {table}")
        self._sheets.append_values(self._spreadsheet_id, f"{table}!A:Z", [values])

    def append_row_if_ready(self, table: str, values: list[Any]) -> bool:
        """Best-effort append for bookkeeping rows; never raises."""

        if self._sheets is None or not self._ready:
            return False
        try:
            self.append_row(table, values)
            return True
        except Exception as e:  # noqa: BLE001
            log.error(f"append_row_if_ready error ({table}): {e}")
            return False
