"""Data models for the Issue Tracker client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

STATUSES: tuple[str, ...] = ("open", "in-progress", "closed")
STATUS_LABELS: dict[str, str] = {
    "open": "Open",
    "in-progress": "In Progress",
    "closed": "Closed",
}


@dataclass
class Issue:
    """An issue as returned by the API."""

    id: int
    title: str
    description: str
    status: str = "open"
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Issue:
        return cls(
            id=int(data["id"]),
            title=data.get("title", ""),
            description=data.get("description", ""),
            status=data.get("status", "open"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


@dataclass
class IssueForm:
    """Create/edit form buffer."""

    title: str = ""
    description: str = ""
    status: str = "open"

    @classmethod
    def from_issue(cls, issue: Issue) -> IssueForm:
        return cls(title=issue.title, description=issue.description, status=issue.status)

    def is_complete(self) -> bool:
        """True when both required fields are filled in."""
        return bool(self.title.strip()) and bool(self.description.strip())

    def to_payload(self) -> dict[str, str]:
        return {"title": self.title, "description": self.description, "status": self.status}
