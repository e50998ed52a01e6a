"""Pydantic models for REST API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from issuetracker.store import IssueStatus


class MessageResponse(BaseModel):
    """Body for confirmations and errors."""

    message: str


class HealthResponse(BaseModel):
    """Body of the health check."""

    status: str = "ok"


# Issue models


class IssueCreate(BaseModel):
    """Request model for creating an issue.

    Title and description are checked by the service so that a missing field
    yields its own message instead of a schema error.
    """

    title: str | None = None
    description: str | None = None
    status: IssueStatus | None = None


class IssueUpdate(BaseModel):
    """Request model for updating an issue (partial update)."""

    title: str | None = None
    description: str | None = None
    status: IssueStatus | None = None


class IssueResponse(BaseModel):
    """Response model for an issue."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    status: str
    created_at: datetime
    updated_at: datetime


def issue_to_response(issue: Any) -> IssueResponse:
    """Convert an Issue model to IssueResponse."""
    return IssueResponse.model_validate(issue)
