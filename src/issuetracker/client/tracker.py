"""IssueTracker - client-side state for the issue list UI."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from issuetracker.client.client import IssueClient
from issuetracker.client.exceptions import IssueClientError
from issuetracker.client.models import STATUSES, Issue, IssueForm

logger = logging.getLogger("issuetracker.client")

MISSING_FIELDS_MESSAGE = "Please fill in all required fields"
CONFIRM_DELETE_MESSAGE = "Are you sure you want to delete this issue?"


def filter_issues(issues: Iterable[Issue], query: str = "", status: str = "all") -> list[Issue]:
    """Case-insensitive substring search on title or description, then status match.

    ``status="all"`` keeps every status. Order of ``issues`` is preserved.
    """
    filtered = list(issues)

    if query:
        q = query.lower()
        filtered = [
            issue
            for issue in filtered
            if q in issue.title.lower() or q in issue.description.lower()
        ]

    if status != "all":
        filtered = [issue for issue in filtered if issue.status == status]

    return filtered


class IssueTracker:
    """State behind the issue list screen.

    ``issues`` is the last list fetched from the server; ``filtered_issues`` is
    recomputed whenever the list, the search query or the status filter
    changes. Every successful write is followed by a full re-fetch.
    """

    def __init__(
        self,
        client: IssueClient,
        alert: Callable[[str], None] | None = None,
        confirm: Callable[[str], bool] | None = None,
    ) -> None:
        """Initialize tracker state.

        Args:
            client: API client
            alert: Blocking notice shown when required fields are missing
            confirm: Blocking yes/no prompt shown before deleting; without one,
                deletes are refused
        """
        self.client = client
        self._alert = alert or (lambda message: logger.warning("%s", message))
        self._confirm = confirm or (lambda _message: False)

        self._issues: list[Issue] = []
        self._search_query = ""
        self._status_filter = "all"
        self.filtered_issues: list[Issue] = []
        self.loading = True

        self.form = IssueForm()
        self.form_open = False
        self.editing_issue: Issue | None = None

    # --- Derived list ---

    @property
    def issues(self) -> list[Issue]:
        return self._issues

    @issues.setter
    def issues(self, value: list[Issue]) -> None:
        self._issues = list(value)
        self._refilter()

    @property
    def search_query(self) -> str:
        return self._search_query

    @search_query.setter
    def search_query(self, value: str) -> None:
        self._search_query = value
        self._refilter()

    @property
    def status_filter(self) -> str:
        return self._status_filter

    @status_filter.setter
    def status_filter(self, value: str) -> None:
        if value != "all" and value not in STATUSES:
            raise ValueError(f"Unknown status filter: {value!r}")
        self._status_filter = value
        self._refilter()

    def _refilter(self) -> None:
        self.filtered_issues = filter_issues(self._issues, self._search_query, self._status_filter)

    def status_counts(self) -> dict[str, int]:
        """Issue counts per status over the full list, plus ``total``."""
        counts = {status: 0 for status in STATUSES}
        for issue in self._issues:
            if issue.status in counts:
                counts[issue.status] += 1
        counts["total"] = len(self._issues)
        return counts

    def find(self, issue_id: int) -> Issue | None:
        """Look up an issue in the last fetched list."""
        return next((i for i in self._issues if i.id == issue_id), None)

    # --- Server round-trips ---

    def fetch_issues(self) -> bool:
        """Replace the list with the server's. Returns False if the fetch failed."""
        self.loading = True
        try:
            self.issues = self.client.list_issues()
            return True
        except IssueClientError as e:
            logger.error("Failed to fetch issues: %s", e)
            return False
        finally:
            self.loading = False

    def open_form(self, issue: Issue | None = None) -> None:
        """Open the form, pre-filled from ``issue`` when editing."""
        self.editing_issue = issue
        self.form = IssueForm.from_issue(issue) if issue is not None else IssueForm()
        self.form_open = True

    def close_form(self) -> None:
        self.form_open = False
        self.editing_issue = None
        self.form = IssueForm()

    def submit(self) -> bool:
        """Send the form as an update when editing, a create otherwise.

        On success the form closes and the list is re-fetched. On failure the
        form stays open.
        """
        if not self.form.is_complete():
            self._alert(MISSING_FIELDS_MESSAGE)
            return False

        try:
            if self.editing_issue is not None:
                self.client.update_issue(self.editing_issue.id, **self.form.to_payload())
            else:
                self.client.create_issue(**self.form.to_payload())
        except IssueClientError as e:
            logger.error("Failed to save issue: %s", e)
            return False

        self.fetch_issues()
        self.close_form()
        return True

    def delete(self, issue_id: int) -> bool:
        """Delete after confirmation, then re-fetch. Returns True if deleted."""
        if not self._confirm(CONFIRM_DELETE_MESSAGE):
            return False

        try:
            self.client.delete_issue(issue_id)
        except IssueClientError as e:
            logger.error("Failed to delete issue: %s", e)
            return False

        self.fetch_issues()
        return True
