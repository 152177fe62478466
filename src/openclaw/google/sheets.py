from typing import Any, Dict, Iterable

from openclaw import logger as log

log = log.get_logger()


class SheetsFacade:
    """Small, stable wrapper around the Google Sheets API.

    Calls are issued once; timeouts and transport errors are left to
    googleapiclient.
    """

    def __init__(self, service: Any):
        self._service = service

    @property
    def service(self) -> Any:
        """Underlying googleapiclient Sheets service."""
        return self._service

    def get_metadata(
        self, spreadsheet_id: str, *, fields: str | None = None
    ) -> Dict[str, Any]:
        if fields:
            return (
                self._service.spreadsheets()
                .get(spreadsheetId=spreadsheet_id, fields=fields)
                .execute()
            )
        return self._service.spreadsheets().get(spreadsheetId=spreadsheet_id).execute()

    def sheet_titles(self, spreadsheet_id: str) -> list[str]:
        meta = self.get_metadata(spreadsheet_id)
        return [
            s.get("properties", {}).get("title")
            for s in meta.get("sheets", [])
            if s.get("properties", {}).get("title")
        ]

    def batch_update(self, spreadsheet_id: str, requests: list[dict]) -> Dict[str, Any]:
        body = {"requests": requests}
        return (
            self._service.spreadsheets()
            .batchUpdate(spreadsheetId=spreadsheet_id, body=body)
            .execute()
        )

    def write_values(
        self,
        spreadsheet_id: str,
        a1_range: str,
        values: list[list[Any]],
        *,
        value_input_option: str = "RAW",
    ) -> Dict:
        body = {"values": values}
        return (
            self._service.spreadsheets()
            .values()
            .update(
                spreadsheetId=spreadsheet_id,
                range=a1_range,
                valueInputOption=value_input_option,
                body=body,
            )
            .execute()
        )

    def append_values(
        self,
        spreadsheet_id: str,
        a1_range: str,
        values: list[list[Any]],
        *,
        value_input_option: str = "RAW",
    ) -> Dict:
        body = {"values": values}
        return (
            self._service.spreadsheets()
            .values()
            .append(
                spreadsheetId=spreadsheet_id,
                range=a1_range,
                valueInputOption=value_input_option,
                insertDataOption="INSERT_ROWS",
                body=body,
            )
            .execute()
        )

    def ensure_sheets(self, spreadsheet_id: str, titles: Iterable[str]) -> list[str]:
        """Add every missing tab in one batchUpdate. Returns the titles added."""

        existing = set(self.sheet_titles(spreadsheet_id))
        to_add = [t for t in titles if t not in existing]
        if to_add:
            log.info(f"Adding sheets {to_add} to spreadsheet {spreadsheet_id}")
            self.batch_update(
                spreadsheet_id,
                [{"addSheet": {"properties": {"title": t}}} for t in to_add],
            )
        return to_add
