"""SQLAlchemy models for the issue store."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class IssueStatus(StrEnum):
    """Issue status enum."""

    OPEN = "open"
    IN_PROGRESS = "in-progress"
    CLOSED = "closed"


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (SQLite drops tzinfo)."""
    return datetime.now(UTC).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Issue(Base):
    """Issue model - one tracked problem or task."""

    __tablename__ = "issues"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=IssueStatus.OPEN.value
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    def __init__(
        self,
        title: str,
        description: str,
        status: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.title = title
        self.description = description
        self.status = status if status is not None else IssueStatus.OPEN.value
        # One clock read so created_at == updated_at on insert
        now = utcnow()
        self.created_at = now
        self.updated_at = now

    def __repr__(self) -> str:
        return f"<Issue(id={self.id!r}, title={self.title!r}, status={self.status!r})>"
