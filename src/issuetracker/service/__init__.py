"""Issue Service - business rules for issue CRUD."""

from issuetracker.service.exceptions import (
    IssueNotFoundError,
    IssueServiceError,
    ValidationError,
)
from issuetracker.service.service import REQUIRED_FIELDS_MESSAGE, IssueService

__all__ = [
    "REQUIRED_FIELDS_MESSAGE",
    "IssueNotFoundError",
    "IssueService",
    "IssueServiceError",
    "ValidationError",
]
