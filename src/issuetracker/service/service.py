"""IssueService - validation and defaults on top of the repository."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from issuetracker.service.exceptions import ValidationError
from issuetracker.store import Issue, IssueRepository, IssueStatus, StoreResult

REQUIRED_FIELDS_MESSAGE = "Title and description are required"


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _validate_status(value: Any) -> str:
    try:
        return IssueStatus(value).value
    except ValueError:
        allowed = ", ".join(s.value for s in IssueStatus)
        raise ValidationError(
            f"Invalid status '{value}'; expected one of: {allowed}"
        ) from None


class IssueService:
    """Issue operations exposed to the API layer."""

    def __init__(self, repository: IssueRepository) -> None:
        self._repository = repository

    def get_all_issues(self) -> list[Issue]:
        return self._repository.find_all()

    def get_issue_by_id(self, issue_id: int) -> Issue | None:
        return self._repository.find_by_id(issue_id)

    def create_issue(self, payload: Mapping[str, Any]) -> Issue:
        """Create an issue, defaulting status to ``open``.

        Raises:
            ValidationError: If title or description is missing or empty, or
                the status is not a known value
        """
        title = payload.get("title")
        description = payload.get("description")
        if _is_blank(title) or _is_blank(description):
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)

        status = payload.get("status")
        status = IssueStatus.OPEN.value if status is None else _validate_status(status)

        return self._repository.create(
            title=str(title),
            description=str(description),
            status=status,
        )

    def update_issue(self, issue_id: int, payload: Mapping[str, Any]) -> StoreResult[Issue]:
        """Partially update an issue; omitted fields are left unchanged.

        Raises:
            ValidationError: If a status is given and is not a known value
        """
        data = dict(payload)
        if data.get("status") is not None:
            data["status"] = _validate_status(data["status"])
        return self._repository.update(issue_id, data)

    def delete_issue(self, issue_id: int) -> StoreResult[None]:
        return self._repository.remove(issue_id)
