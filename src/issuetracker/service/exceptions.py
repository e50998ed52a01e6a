"""Custom exceptions for the issue service."""


class IssueServiceError(Exception):
    """Base exception for issue service errors."""


class ValidationError(IssueServiceError):
    """Payload is missing a required field or carries an invalid value."""


class IssueNotFoundError(IssueServiceError):
    """Issue with given ID does not exist."""
