"""Issue Tracker client - API client, list state and terminal UI."""

from issuetracker.client.client import IssueClient
from issuetracker.client.exceptions import IssueClientError, IssueNotFoundError
from issuetracker.client.models import STATUSES, Issue, IssueForm
from issuetracker.client.tracker import IssueTracker, filter_issues

__all__ = [
    "STATUSES",
    "Issue",
    "IssueClient",
    "IssueClientError",
    "IssueForm",
    "IssueNotFoundError",
    "IssueTracker",
    "filter_issues",
]
