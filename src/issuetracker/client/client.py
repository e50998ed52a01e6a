"""IssueClient - HTTP client for the Issue Tracker REST API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from issuetracker.client.exceptions import IssueClientError, IssueNotFoundError
from issuetracker.client.models import Issue

logger = logging.getLogger("issuetracker.client")


class IssueClient:
    """Thin wrapper over the ``/issues`` endpoints.

    Every call is a single blocking round-trip; nothing is cached.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000/api",
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API base URL, e.g. "http://localhost:8000/api"
            timeout: Per-request timeout in seconds
            http_client: Pre-built httpx client (e.g. a FastAPI TestClient)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.Client | None = http_client

    @property
    def client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> IssueClient:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            IssueNotFoundError: On 404
            IssueClientError: On any other non-2xx status or transport error
        """
        try:
            response = self.client.request(method, f"{self.base_url}{path}", json=json)
        except httpx.HTTPError as e:
            raise IssueClientError(f"{method} {path} failed: {e}") from e

        if response.status_code == 404:
            raise IssueNotFoundError(_error_message(response), status_code=404)
        if response.status_code >= 400:
            raise IssueClientError(_error_message(response), status_code=response.status_code)
        return response.json()

    def health(self) -> bool:
        """Return True if the server's health check answers ``ok``.

        The health endpoint lives at the server root, outside the API base.
        """
        url = httpx.URL(self.base_url).join("/health")
        try:
            response = self.client.get(url)
        except httpx.HTTPError:
            logger.warning("Health check failed for %s", url)
            return False
        return response.status_code == 200 and response.json().get("status") == "ok"

    def list_issues(self) -> list[Issue]:
        data = self._request("GET", "/issues")
        return [Issue.from_dict(item) for item in data]

    def get_issue(self, issue_id: int) -> Issue:
        return Issue.from_dict(self._request("GET", f"/issues/{issue_id}"))

    def create_issue(
        self, title: str, description: str, status: str | None = None
    ) -> Issue:
        payload: dict[str, Any] = {"title": title, "description": description}
        if status is not None:
            payload["status"] = status
        return Issue.from_dict(self._request("POST", "/issues", json=payload))

    def update_issue(self, issue_id: int, **fields: Any) -> Issue:
        """Send only the given fields; the server leaves the rest unchanged."""
        payload = {k: v for k, v in fields.items() if v is not None}
        return Issue.from_dict(self._request("PUT", f"/issues/{issue_id}", json=payload))

    def delete_issue(self, issue_id: int) -> None:
        self._request("DELETE", f"/issues/{issue_id}")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code}"
