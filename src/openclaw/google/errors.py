from openclaw.errors import OpenClawError


class GoogleAPIError(OpenClawError):
    """Base error for openclaw.google."""


class CredentialsDecodeError(GoogleAPIError):
    """Service account credentials could not be decoded."""


class RecordStoreNotReadyError(GoogleAPIError):
    """The record store is not configured or failed to initialize."""
