"""Terminal UI for the issue list, rendered with rich."""

from __future__ import annotations

import shlex
from collections.abc import Callable, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from issuetracker.client.models import STATUS_LABELS, STATUSES, Issue
from issuetracker.client.tracker import IssueTracker

STATUS_STYLES: dict[str, str] = {
    "open": "blue",
    "in-progress": "yellow",
    "closed": "green",
}

STATUS_FILTERS: tuple[str, ...] = ("all", *STATUSES)

HELP_ROWS: tuple[tuple[str, str], ...] = (
    ("list", "Redraw the issue list"),
    ("search <text>", "Filter by title or description (no text clears)"),
    ("status <all|open|in-progress|closed>", "Filter by status"),
    ("new", "Create an issue"),
    ("edit <id>", "Edit an issue"),
    ("delete <id>", "Delete an issue"),
    ("retry", "Reopen the unsaved form"),
    ("cancel", "Discard the unsaved form"),
    ("refresh", "Re-fetch issues from the server"),
    ("help", "Show this help"),
    ("quit", "Exit"),
)


def make_console(*, plain: bool = False) -> Console:
    return Console(no_color=plain, highlight=False)


def status_badge(status: str) -> str:
    label = STATUS_LABELS.get(status, status)
    style = STATUS_STYLES.get(status)
    return f"[{style}]{label}[/{style}]" if style else label


def _short_timestamp(value: str | None) -> str:
    if not value:
        return ""
    return value.replace("T", " ")[:16]


def render_issues(console: Console, issues: Sequence[Issue], *, title: str | None = None) -> None:
    if not issues:
        console.print("[dim]No issues found.[/dim]")
        return

    table = Table(title=title)
    table.add_column("ID", justify="right", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Title")
    table.add_column("Description")
    table.add_column("Updated", no_wrap=True)
    for issue in issues:
        table.add_row(
            str(issue.id),
            status_badge(issue.status),
            issue.title,
            issue.description,
            _short_timestamp(issue.updated_at),
        )
    console.print(table)


def render_summary(console: Console, tracker: IssueTracker) -> None:
    counts = tracker.status_counts()
    parts = [f"{status_badge(s)}: {counts[s]}" for s in STATUSES]
    parts.append(f"Total: {counts['total']}")
    filters = []
    if tracker.search_query:
        filters.append(f"search={tracker.search_query!r}")
    if tracker.status_filter != "all":
        filters.append(f"status={tracker.status_filter}")
    if filters:
        parts.append(f"[dim]({', '.join(filters)})[/dim]")
    console.print("  ".join(parts))


def render_help(console: Console) -> None:
    table = Table(title="Commands")
    table.add_column("Command", no_wrap=True)
    table.add_column("Description")
    for command, description in HELP_ROWS:
        table.add_row(command, description)
    console.print(table)


class IssueShell:
    """Interactive loop over an :class:`IssueTracker`."""

    def __init__(
        self,
        tracker: IssueTracker,
        console: Console | None = None,
        read_line: Callable[[], str] | None = None,
    ) -> None:
        self.tracker = tracker
        self.console = console or make_console()
        self._read_line = read_line or self._prompt_line

    def _prompt_line(self) -> str:
        return Prompt.ask("\n[bold]issues[/bold]", console=self.console)

    def render(self) -> None:
        if self.tracker.loading:
            self.console.print("[dim]Loading issues...[/dim]")
            return
        render_issues(self.console, self.tracker.filtered_issues, title="Issues")
        render_summary(self.console, self.tracker)

    def run(self) -> None:
        """Fetch once, then read commands until ``quit`` or EOF."""
        self.tracker.fetch_issues()
        self.render()
        try:
            while True:
                line = self._read_line().strip()
                if not line:
                    continue
                if not self.handle_command(line):
                    break
        except (KeyboardInterrupt, EOFError):
            self.console.print()
        self.console.print("Goodbye.")

    def handle_command(self, line: str) -> bool:
        """Run one command. Returns False when the shell should exit."""
        try:
            tokens = shlex.split(line)
        except ValueError:
            tokens = line.split()
        if not tokens:
            return True
        cmd, args = tokens[0].lower(), tokens[1:]

        if cmd in ("quit", "exit", "q"):
            return False
        if cmd == "help":
            render_help(self.console)
        elif cmd in ("list", "ls"):
            self.render()
        elif cmd == "refresh":
            self.tracker.fetch_issues()
            self.render()
        elif cmd == "search":
            self.tracker.search_query = " ".join(args)
            self.render()
        elif cmd == "status":
            self._cmd_status(args)
        elif cmd == "new":
            self.tracker.open_form()
            self._edit_form()
        elif cmd == "edit":
            self._cmd_edit(args)
        elif cmd == "retry":
            if self.tracker.form_open:
                self._edit_form()
            else:
                self.console.print("No unsaved issue.")
        elif cmd == "cancel":
            self.tracker.close_form()
        elif cmd in ("delete", "rm"):
            self._cmd_delete(args)
        else:
            self.console.print("Unknown command. Type 'help' for instructions.")
        return True

    # ---- individual command helpers ----

    def _parse_id(self, args: Sequence[str], usage: str) -> int | None:
        if len(args) != 1 or not args[0].isdigit():
            self.console.print(f"Usage: {usage}")
            return None
        return int(args[0])

    def _cmd_status(self, args: Sequence[str]) -> None:
        if len(args) != 1 or args[0].lower() not in STATUS_FILTERS:
            self.console.print(f"Usage: status <{'|'.join(STATUS_FILTERS)}>")
            return
        self.tracker.status_filter = args[0].lower()
        self.render()

    def _cmd_edit(self, args: Sequence[str]) -> None:
        issue_id = self._parse_id(args, "edit <id>")
        if issue_id is None:
            return
        issue = self.tracker.find(issue_id)
        if issue is None:
            self.console.print(f"Issue {issue_id} not found.")
            return
        self.tracker.open_form(issue)
        self._edit_form()

    def _cmd_delete(self, args: Sequence[str]) -> None:
        issue_id = self._parse_id(args, "delete <id>")
        if issue_id is None:
            return
        if self.tracker.delete(issue_id):
            self.render()

    def _edit_form(self) -> None:
        tracker = self.tracker
        heading = (
            f"Edit issue {tracker.editing_issue.id}"
            if tracker.editing_issue is not None
            else "New issue"
        )
        self.console.print(Panel("Fill in the fields; Enter keeps the shown value.", title=heading))
        form = tracker.form
        form.title = Prompt.ask(
            "Title", default=form.title, show_default=bool(form.title), console=self.console
        ).strip()
        form.description = Prompt.ask(
            "Description",
            default=form.description,
            show_default=bool(form.description),
            console=self.console,
        ).strip()
        form.status = Prompt.ask(
            "Status", choices=list(STATUSES), default=form.status, console=self.console
        )
        if tracker.submit():
            self.render()
        else:
            self.console.print("Issue not saved. Type 'retry' to edit it again or 'cancel'.")


def console_alert(console: Console) -> Callable[[str], None]:
    """Blocking notice: print the message and wait for Enter."""

    def alert(message: str) -> None:
        console.print(f"[bold red]{message}[/bold red]")
        Prompt.ask("Press Enter to continue", default="", show_default=False, console=console)

    return alert


def console_confirm(console: Console) -> Callable[[str], bool]:
    """Blocking yes/no prompt."""

    def confirm(message: str) -> bool:
        return Confirm.ask(message, default=False, console=console)

    return confirm
