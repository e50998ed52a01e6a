"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends

from issuetracker.service import IssueService
from issuetracker.store import Database, IssueRepository

# Global Database instance (initialized on app startup)
_database: Database | None = None


def init_database(url: str) -> Database:
    """Initialize the global Database instance and create tables."""
    global _database  # noqa: PLW0603
    if _database is not None:
        _database.close()
    _database = Database(url)
    _database.create_tables()
    return _database


def close_database() -> None:
    """Close the global Database instance."""
    global _database  # noqa: PLW0603
    if _database is not None:
        _database.close()
        _database = None


def get_database() -> Generator[Database, None, None]:
    """Dependency that provides the Database instance."""
    if _database is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")
    yield _database


# Type alias for dependency injection
DatabaseDep = Annotated[Database, Depends(get_database)]


def get_issue_service(db: DatabaseDep) -> IssueService:
    """Dependency that provides an IssueService bound to the database."""
    return IssueService(IssueRepository(db))


# Type alias for dependency injection
IssueServiceDep = Annotated[IssueService, Depends(get_issue_service)]
