"""Unit tests for the terminal UI."""

import io
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console

from issuetracker.client import Issue, IssueClient, IssueTracker
from issuetracker.client.ui import IssueShell, render_issues, status_badge

LOGIN_BUG = Issue(id=1, title="Login bug", description="Cannot sign in", status="open")
CRASH = Issue(id=2, title="Crash on save", description="App closes", status="closed")


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=120, no_color=True)


@pytest.fixture
def client() -> MagicMock:
    client = MagicMock(spec=IssueClient)
    client.list_issues.return_value = [LOGIN_BUG, CRASH]
    return client


@pytest.fixture
def tracker(client: MagicMock) -> IssueTracker:
    tracker = IssueTracker(client, alert=MagicMock(), confirm=MagicMock(return_value=True))
    tracker.fetch_issues()
    return tracker


@pytest.fixture
def shell(tracker: IssueTracker, console: Console) -> IssueShell:
    return IssueShell(tracker, console=console)


def output(console: Console) -> str:
    return console.file.getvalue()


@pytest.mark.unit
class TestRender:
    """Tests for rendering helpers."""

    def test_render_issues_table(self, console: Console) -> None:
        render_issues(console, [LOGIN_BUG, CRASH])

        text = output(console)
        assert "Login bug" in text
        assert "Crash on save" in text
        assert "Closed" in text

    def test_render_empty(self, console: Console) -> None:
        render_issues(console, [])

        assert "No issues found." in output(console)

    def test_status_badge_styles(self) -> None:
        assert status_badge("in-progress") == "[yellow]In Progress[/yellow]"
        assert status_badge("unknown") == "unknown"


@pytest.mark.unit
class TestCommands:
    """Tests for IssueShell.handle_command."""

    def test_quit_stops(self, shell: IssueShell) -> None:
        assert shell.handle_command("quit") is False

    def test_search_filters(self, shell: IssueShell, tracker: IssueTracker) -> None:
        assert shell.handle_command("search bug") is True

        assert tracker.search_query == "bug"
        assert tracker.filtered_issues == [LOGIN_BUG]

    def test_status_filters(self, shell: IssueShell, tracker: IssueTracker) -> None:
        shell.handle_command("status closed")

        assert tracker.filtered_issues == [CRASH]

    def test_status_invalid_shows_usage(
        self, shell: IssueShell, tracker: IssueTracker, console: Console
    ) -> None:
        shell.handle_command("status blocked")

        assert tracker.status_filter == "all"
        assert "Usage: status" in output(console)

    def test_unknown_command(self, shell: IssueShell, console: Console) -> None:
        shell.handle_command("frobnicate")

        assert "Unknown command" in output(console)

    def test_delete_calls_tracker(self, shell: IssueShell, client: MagicMock) -> None:
        shell.handle_command("delete 2")

        client.delete_issue.assert_called_once_with(2)

    def test_delete_requires_numeric_id(
        self, shell: IssueShell, client: MagicMock, console: Console
    ) -> None:
        shell.handle_command("delete two")

        client.delete_issue.assert_not_called()
        assert "Usage: delete <id>" in output(console)

    def test_edit_unknown_id(self, shell: IssueShell, console: Console) -> None:
        shell.handle_command("edit 42")

        assert "Issue 42 not found." in output(console)

    def test_new_prompts_and_creates(self, shell: IssueShell, client: MagicMock) -> None:
        with patch(
            "issuetracker.client.ui.Prompt.ask",
            side_effect=["Title", "Description", "in-progress"],
        ):
            shell.handle_command("new")

        client.create_issue.assert_called_once_with(
            title="Title", description="Description", status="in-progress"
        )

    def test_edit_prompts_and_updates(self, shell: IssueShell, client: MagicMock) -> None:
        with patch(
            "issuetracker.client.ui.Prompt.ask",
            side_effect=["Login bug", "Cannot sign in", "closed"],
        ):
            shell.handle_command("edit 1")

        client.update_issue.assert_called_once_with(
            1, title="Login bug", description="Cannot sign in", status="closed"
        )

    def test_failed_save_keeps_form_for_retry(
        self, shell: IssueShell, tracker: IssueTracker, client: MagicMock, console: Console
    ) -> None:
        with patch(
            "issuetracker.client.ui.Prompt.ask",
            side_effect=["Only title", "", "open"],
        ):
            shell.handle_command("new")

        client.create_issue.assert_not_called()
        assert tracker.form_open is True
        assert "retry" in output(console)

        shell.handle_command("cancel")
        assert tracker.form_open is False


@pytest.mark.unit
class TestRun:
    """Tests for the interactive loop."""

    def test_run_reads_until_quit(self, tracker: IssueTracker, console: Console) -> None:
        lines = iter(["", "search crash", "quit"])
        shell = IssueShell(tracker, console=console, read_line=lambda: next(lines))

        shell.run()

        assert tracker.filtered_issues == [CRASH]
        assert "Goodbye." in output(console)

    def test_run_stops_on_eof(self, tracker: IssueTracker, console: Console) -> None:
        def read_line() -> str:
            raise EOFError

        IssueShell(tracker, console=console, read_line=read_line).run()

        assert "Goodbye." in output(console)
