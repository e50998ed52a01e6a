"""Integration tests for the issue store database."""

import tempfile
from pathlib import Path

import pytest
from sqlalchemy import inspect

from issuetracker.store import Database, IssueRepository


@pytest.fixture
def temp_db_path() -> str:
    """Create a temporary database path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        return f.name


@pytest.fixture
def database(temp_db_path: str):
    """Create a database instance with tables."""
    db = Database(temp_db_path)
    db.create_tables()
    yield db
    db.close()
    Path(temp_db_path).unlink(missing_ok=True)
    Path(f"{temp_db_path}-wal").unlink(missing_ok=True)
    Path(f"{temp_db_path}-shm").unlink(missing_ok=True)


@pytest.mark.integration
class TestDatabaseSetup:
    """Tests for database setup."""

    def test_bare_path_becomes_sqlite_url(self, temp_db_path: str) -> None:
        assert Database(temp_db_path).url == f"sqlite:///{temp_db_path}"

    def test_database_creates_issues_table(self, database: Database) -> None:
        inspector = inspect(database.engine)
        assert "issues" in inspector.get_table_names()
        columns = {c["name"] for c in inspector.get_columns("issues")}
        assert columns == {"id", "title", "description", "status", "created_at", "updated_at"}

    def test_database_wal_mode(self, database: Database) -> None:
        assert database.is_wal_mode()

    def test_creates_parent_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "issues.db"
            db = Database(f"sqlite:///{path}")
            db.create_tables()
            try:
                assert path.exists()
            finally:
                db.close()


@pytest.mark.integration
class TestPersistence:
    """Rows survive closing and reopening the database."""

    def test_issue_persists_across_connections(self, temp_db_path: str, database: Database) -> None:
        created = IssueRepository(database).create(title="T", description="D", status="open")
        database.close()

        reopened = Database(temp_db_path)
        try:
            found = IssueRepository(reopened).find_by_id(created.id)
            assert found is not None
            assert found.title == "T"
            assert found.created_at == created.created_at
        finally:
            reopened.close()
