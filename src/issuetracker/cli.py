"""Command-line entry point: run the API server or the terminal client."""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import Any

import click
from rich.console import Console

from issuetracker import __version__
from issuetracker.client import IssueClient, IssueClientError, IssueTracker
from issuetracker.client.models import STATUSES
from issuetracker.client.ui import (
    IssueShell,
    console_alert,
    console_confirm,
    make_console,
    render_issues,
)
from issuetracker.config import Settings
from issuetracker.logging import get_logger, setup_logging

logger = get_logger("cli")


def _from_settings(name: str) -> Callable[[], Any]:
    """Option default read from the environment when the command runs."""
    return lambda: getattr(Settings.from_env(), name)


def client_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by every command that talks to the API."""
    func = click.option("--plain", is_flag=True, help="Disable colours")(func)
    func = click.option(
        "--api-base",
        default=_from_settings("api_base"),
        help="API base URL (default: $ISSUETRACKER_API_BASE)",
    )(func)
    return func


def _open_tracker(api_base: str, plain: bool) -> tuple[IssueClient, IssueTracker, Console]:
    console = make_console(plain=plain)
    client = IssueClient(base_url=api_base)
    tracker = IssueTracker(
        client,
        alert=console_alert(console),
        confirm=console_confirm(console),
    )
    return client, tracker, console


@click.group()
@click.version_option(version=__version__, prog_name="issuetracker")
@click.option(
    "--log-level",
    default=_from_settings("log_level"),
    help="DEBUG, INFO, WARNING, ERROR",
)
@click.option("--log-dir", default=_from_settings("log_dir"), help="Directory for log files")
@click.pass_context
def main(ctx: click.Context, log_level: str, log_dir: str) -> None:
    """Issue Tracker: REST server and terminal client."""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level
    setup_logging(log_dir=log_dir, level=log_level, console=ctx.invoked_subcommand == "serve")


@main.command()
@click.option("--database-url", default=_from_settings("database_url"))
@click.option("--host", default=_from_settings("host"))
@click.option("--port", type=int, default=_from_settings("port"))
@click.pass_context
def serve(ctx: click.Context, database_url: str, host: str, port: int) -> None:
    """Run the REST API server."""
    import uvicorn  # noqa: PLC0415

    from issuetracker.api.app import create_app  # noqa: PLC0415

    settings = Settings.from_env()
    settings.database_url = database_url
    app = create_app(settings=settings)
    logger.info("Serving on %s:%s", host, port)
    uvicorn.run(app, host=host, port=port, log_level=ctx.obj["log_level"].lower())


@main.command()
@client_options
def ui(api_base: str, plain: bool) -> None:
    """Interactive issue list."""
    client, tracker, console = _open_tracker(api_base, plain)
    with client:
        IssueShell(tracker, console=console).run()


@main.command(name="list")
@client_options
@click.option("--search", default="", help="Substring of title or description")
@click.option("--status", type=click.Choice(("all", *STATUSES)), default="all")
def list_issues(api_base: str, plain: bool, search: str, status: str) -> None:
    """Print issues."""
    client, tracker, console = _open_tracker(api_base, plain)
    with client:
        if not tracker.fetch_issues():
            console.print("[red]Failed to fetch issues[/red]")
            sys.exit(1)
        tracker.search_query = search
        tracker.status_filter = status
        render_issues(console, tracker.filtered_issues)


@main.command()
@client_options
@click.option("--title", required=True)
@click.option("--description", required=True)
@click.option("--status", type=click.Choice(STATUSES))
def create(api_base: str, plain: bool, title: str, description: str, status: str | None) -> None:
    """Create an issue."""
    console = make_console(plain=plain)
    with IssueClient(base_url=api_base) as client:
        try:
            issue = client.create_issue(title, description, status)
        except IssueClientError as e:
            console.print(f"[red]{e}[/red]")
            sys.exit(1)
    console.print(f"Created issue {issue.id}")


@main.command()
@client_options
@click.argument("issue_id", type=int)
@click.option("--title")
@click.option("--description")
@click.option("--status", type=click.Choice(STATUSES))
def update(
    api_base: str,
    plain: bool,
    issue_id: int,
    title: str | None,
    description: str | None,
    status: str | None,
) -> None:
    """Update an issue."""
    console = make_console(plain=plain)
    with IssueClient(base_url=api_base) as client:
        try:
            issue = client.update_issue(
                issue_id, title=title, description=description, status=status
            )
        except IssueClientError as e:
            console.print(f"[red]{e}[/red]")
            sys.exit(1)
    console.print(f"Updated issue {issue.id}")


@main.command()
@client_options
@click.argument("issue_id", type=int)
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
def delete(api_base: str, plain: bool, issue_id: int, yes: bool) -> None:
    """Delete an issue."""
    client, tracker, console = _open_tracker(api_base, plain)
    with client:
        if yes:
            try:
                client.delete_issue(issue_id)
            except IssueClientError as e:
                console.print(f"[red]{e}[/red]")
                sys.exit(1)
        elif not tracker.delete(issue_id):
            sys.exit(1)
    console.print(f"Deleted issue {issue_id}")


@main.command()
@client_options
def health(api_base: str, plain: bool) -> None:
    """Check the server is up."""
    console = make_console(plain=plain)
    with IssueClient(base_url=api_base) as client:
        healthy = client.health()
    console.print("ok" if healthy else "[red]unreachable[/red]")
    if not healthy:
        sys.exit(1)


if __name__ == "__main__":
    main()
