from openclaw.errors import MissingCredentialError, OpenClawError

__all__ = [
    "EmptyResponseError",
    "LLMError",
    "MissingCredentialError",
    "UnparseableOutputError",
    "UpstreamError",
]


class LLMError(OpenClawError):
    pass


class UpstreamError(LLMError):
    """The backend answered with a non-success status or an unusable payload."""


class EmptyResponseError(LLMError):
    """The backend answered but produced no text."""


class UnparseableOutputError(LLMError):
    """Neither the original output nor the repaired output parsed as JSON."""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text
