from openclaw.errors import OpenClawError


class GitHubAPIError(OpenClawError):
    """Non-success response from the GitHub REST API."""

    def __init__(self, status: int, message: str, *, label: str = "GitHub"):
        super().__init__(f"{label} API error {status}: {message}")
        self.status = status
