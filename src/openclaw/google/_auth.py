from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from typing import Any

from google.oauth2 import service_account
from googleapiclient.discovery import build

from openclaw import logger as log

from .errors import CredentialsDecodeError

log = log.get_logger()


DEFAULT_SCOPES = ("https://www.googleapis.com/auth/spreadsheets",)


@dataclass(frozen=True)
class AuthConfig:
    """How Google credentials should be loaded."""

    scopes: tuple[str, ...] = DEFAULT_SCOPES
    credentials_env: str = "GOOGLE_SERVICE_ACCOUNT_JSON_B64"


def decode_service_account(b64: str, config: AuthConfig | None = None) -> dict:
    """Decode a base64 encoded service account JSON document."""

    config = config or AuthConfig()
    try:
        raw = base64.b64decode(str(b64), validate=True).decode("utf-8")
    except (binascii.Error, ValueError) as e:
        raise CredentialsDecodeError(
            f"{config.credentials_env} is not valid base64"
        ) from e

    try:
        info = json.loads(raw)
    except ValueError as e:
        raise CredentialsDecodeError(
            f"{config.credentials_env} does not decode to valid JSON"
        ) from e

    if not isinstance(info, dict):
        raise CredentialsDecodeError(
            f"{config.credentials_env} does not decode to a JSON object"
        )
    return info


def load_credentials(b64: str, config: AuthConfig | None = None):
    """Build service account credentials from the base64 env payload."""

    config = config or AuthConfig()
    info = decode_service_account(b64, config)
    log.debug(f"Loaded service account {info.get('client_email', '(unknown)')}")
    return service_account.Credentials.from_service_account_info(
        info,
        scopes=list(config.scopes),
    )


def build_sheets_service(creds) -> Any:
    return build("sheets", "v4", credentials=creds, cache_discovery=False)
