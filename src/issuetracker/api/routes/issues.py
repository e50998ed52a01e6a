"""Issue CRUD endpoints."""

from fastapi import APIRouter, status

from issuetracker.api.dependencies import IssueServiceDep
from issuetracker.api.models import (
    IssueCreate,
    IssueResponse,
    IssueUpdate,
    MessageResponse,
    issue_to_response,
)
from issuetracker.service import IssueNotFoundError
from issuetracker.store import IssueStoreError

router = APIRouter(prefix="/issues", tags=["issues"])


@router.get("", response_model=list[IssueResponse])
def list_issues(service: IssueServiceDep) -> list[IssueResponse]:
    """List all issues, newest first."""
    return [issue_to_response(i) for i in service.get_all_issues()]


@router.get("/{issue_id}", response_model=IssueResponse)
def get_issue(issue_id: int, service: IssueServiceDep) -> IssueResponse:
    """Get an issue by ID."""
    issue = service.get_issue_by_id(issue_id)
    if issue is None:
        raise IssueNotFoundError(f"Issue with id '{issue_id}' not found")
    return issue_to_response(issue)


@router.post("", response_model=IssueResponse, status_code=status.HTTP_201_CREATED)
def create_issue(issue: IssueCreate, service: IssueServiceDep) -> IssueResponse:
    """Create a new issue."""
    created = service.create_issue(issue.model_dump(mode="json", exclude_none=True))
    return issue_to_response(created)


@router.put("/{issue_id}", response_model=IssueResponse)
def update_issue(
    issue_id: int, service: IssueServiceDep, issue: IssueUpdate | None = None
) -> IssueResponse:
    """Update an issue (partial update). A missing body only re-stamps updated_at."""
    payload = issue.model_dump(mode="json", exclude_none=True) if issue is not None else {}
    result = service.update_issue(issue_id, payload)
    if result.is_not_found:
        raise IssueNotFoundError(f"Issue with id '{issue_id}' not found")
    if result.is_failed:
        raise IssueStoreError(f"Failed to update issue {issue_id}: {result.error}")
    return issue_to_response(result.value)


@router.delete("/{issue_id}", response_model=MessageResponse)
def delete_issue(issue_id: int, service: IssueServiceDep) -> MessageResponse:
    """Delete an issue."""
    result = service.delete_issue(issue_id)
    if result.is_not_found:
        raise IssueNotFoundError(f"Issue with id '{issue_id}' not found")
    if result.is_failed:
        raise IssueStoreError(f"Failed to delete issue {issue_id}: {result.error}")
    return MessageResponse(message="Issue deleted")
