"""REST API for Issue Tracker."""

from issuetracker.api.app import app, create_app
from issuetracker.api.models import (
    IssueCreate,
    IssueResponse,
    IssueUpdate,
    MessageResponse,
)

__all__ = [
    "IssueCreate",
    "IssueResponse",
    "IssueUpdate",
    "MessageResponse",
    "app",
    "create_app",
]
