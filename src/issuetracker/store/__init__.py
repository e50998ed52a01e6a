"""Issue Store - persistent storage for issues."""

from issuetracker.store.database import Database
from issuetracker.store.exceptions import IssueStoreError
from issuetracker.store.models import Base, Issue, IssueStatus
from issuetracker.store.repository import IssueRepository
from issuetracker.store.results import Outcome, StoreResult

__all__ = [
    "Base",
    "Database",
    "Issue",
    "IssueRepository",
    "IssueStatus",
    "IssueStoreError",
    "Outcome",
    "StoreResult",
]
