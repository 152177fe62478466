class OpenClawError(RuntimeError):
    """Base error for openclaw."""


class MissingCredentialError(OpenClawError):
    """A required configuration value (key, token, id) is absent."""


class EmptyProposalError(OpenClawError):
    """Self-modification was requested with nothing staged."""


class NoAllowlistedFilesError(OpenClawError):
    """A proposed change touched none of the allowlisted files."""
