"""Custom exceptions for the Issue Tracker client."""


class IssueClientError(Exception):
    """Request to the Issue Tracker API failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class IssueNotFoundError(IssueClientError):
    """Issue with given ID does not exist on the server."""
