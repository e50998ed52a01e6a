"""IssueRepository - CRUD queries against the issue store."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from issuetracker.store.database import Database
from issuetracker.store.exceptions import IssueStoreError
from issuetracker.store.models import Issue, utcnow
from issuetracker.store.results import StoreResult

logger = logging.getLogger("issuetracker.store")

# Columns a caller may change after creation
UPDATABLE_FIELDS = ("title", "description", "status")

# Signed 64-bit INTEGER range; larger ids cannot be stored, so they never match
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1


def _storable_id(issue_id: int) -> bool:
    return MIN_ID <= issue_id <= MAX_ID


class IssueRepository:
    """Translates CRUD intents into store queries.

    Reads return ``None`` for a missing issue. Writes return a
    :class:`StoreResult` that tells "not found" apart from a store failure.
    """

    def __init__(self, db: Database) -> None:
        """Initialize the repository.

        Args:
            db: Process-wide database handle, created once at startup
        """
        self._db = db

    def find_all(self) -> list[Issue]:
        """List all issues, newest first.

        Raises:
            IssueStoreError: If the query fails
        """
        session = self._db.get_session()
        try:
            stmt = select(Issue).order_by(Issue.created_at.desc(), Issue.id.desc())
            return list(session.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            raise IssueStoreError("Failed to list issues") from e
        finally:
            session.close()

    def find_by_id(self, issue_id: int) -> Issue | None:
        """Get an issue by ID, or None if it doesn't exist.

        Raises:
            IssueStoreError: If the query fails
        """
        if not _storable_id(issue_id):
            return None
        session = self._db.get_session()
        try:
            return session.get(Issue, issue_id)
        except SQLAlchemyError as e:
            raise IssueStoreError(f"Failed to fetch issue {issue_id}") from e
        finally:
            session.close()

    def create(self, title: str, description: str, status: str) -> Issue:
        """Insert a new issue.

        Returns:
            The stored Issue with generated ID and timestamps

        Raises:
            IssueStoreError: If the insert fails
        """
        session = self._db.get_session()
        try:
            issue = Issue(title=title, description=description, status=status)
            session.add(issue)
            session.commit()
            session.refresh(issue)
            logger.info("Created issue %s", issue.id)
            return issue
        except SQLAlchemyError as e:
            session.rollback()
            raise IssueStoreError("Failed to create issue") from e
        finally:
            session.close()

    def update(self, issue_id: int, data: Mapping[str, Any]) -> StoreResult[Issue]:
        """Apply the provided fields to an issue and refresh ``updated_at``.

        Keys outside title/description/status and ``None`` values are
        ignored, so omitted fields keep their stored value.
        """
        changes = {
            key: value
            for key, value in data.items()
            if key in UPDATABLE_FIELDS and value is not None
        }
        if not _storable_id(issue_id):
            return StoreResult.not_found()
        session = self._db.get_session()
        try:
            issue = session.get(Issue, issue_id)
            if issue is None:
                return StoreResult.not_found()

            for key, value in changes.items():
                setattr(issue, key, str(value))
            issue.updated_at = max(utcnow(), issue.created_at)

            session.commit()
            session.refresh(issue)
            logger.info("Updated issue %s (%s)", issue_id, ", ".join(changes) or "touch")
            return StoreResult.ok(issue)
        except SQLAlchemyError as e:
            session.rollback()
            logger.exception("Failed to update issue %s", issue_id)
            return StoreResult.failed(str(e))
        finally:
            session.close()

    def remove(self, issue_id: int) -> StoreResult[None]:
        """Hard-delete an issue."""
        if not _storable_id(issue_id):
            return StoreResult.not_found()
        session = self._db.get_session()
        try:
            issue = session.get(Issue, issue_id)
            if issue is None:
                return StoreResult.not_found()

            session.delete(issue)
            session.commit()
            logger.info("Deleted issue %s", issue_id)
            return StoreResult.ok()
        except SQLAlchemyError as e:
            session.rollback()
            logger.exception("Failed to delete issue %s", issue_id)
            return StoreResult.failed(str(e))
        finally:
            session.close()
