"""openclaw.google

Google Sheets access for the record store:

    from openclaw.google import SheetsFacade, build_sheets_service, load_credentials

    creds = load_credentials(settings.google_service_account_json_b64)
    sheets = SheetsFacade(build_sheets_service(creds))
"""

from ._auth import build_sheets_service, load_credentials
from .sheets import SheetsFacade

__all__ = ["SheetsFacade", "build_sheets_service", "load_credentials"]
