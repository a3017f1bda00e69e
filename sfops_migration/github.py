from __future__ import annotations

import json
from typing import Any, Iterator, MutableMapping, Optional

import requests
from requests import Response, Session

from sfops_migration.interfaces import StoreError, TicketStore, VariableNotFoundError, VariableStore
from sfops_migration.models import Ticket, Variable

DEFAULT_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"
VARIABLES_PER_PAGE = 30


class GitHubError(StoreError):
    """Base error for GitHub REST API failures."""


class GitHubVariableNotFoundError(GitHubError, VariableNotFoundError):
    """Raised when a repository variable lookup returns 404."""


class GitHubClient(VariableStore, TicketStore):
    """Synchronous client for the GitHub REST endpoints the migration needs.

    Covers Actions repository variables (list, get, create, delete) and issues
    (get, update). Listing follows ``Link: rel="next"`` headers so callers always
    receive every variable.

    Example:
        >>> client = GitHubClient(token="ghp_...")
        >>> names = [v.name for v in client.list_variables("acme", "sandboxes")]
    """

    def __init__(
        self,
        *,
        token: str,
        base_url: str = DEFAULT_API_URL,
        timeout: float | None = 30.0,
        session: Session | None = None,
    ) -> None:
        if not token:
            raise ValueError("token is required")
        if not base_url:
            raise ValueError("base_url is required")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session: Session = session or requests.Session()
        self._session.headers.setdefault("Authorization", f"Bearer {token}")
        self._session.headers.setdefault("Accept", "application/vnd.github+json")
        self._session.headers.setdefault("X-GitHub-Api-Version", API_VERSION)

    def close(self) -> None:
        self._session.close()

    # Variables -------------------------------------------------------------

    def list_variables(self, owner: str, repo: str) -> list[Variable]:
        url: Optional[str] = f"{self.base_url}/repos/{owner}/{repo}/actions/variables"
        params: Optional[dict[str, Any]] = {"per_page": VARIABLES_PER_PAGE}
        variables: list[Variable] = []
        for page in self._paginate(url, params):
            for item in page.get("variables", []):
                variables.append(Variable(name=str(item["name"]), value=str(item["value"])))
        return variables

    def get_variable(self, owner: str, repo: str, name: str) -> Variable:
        url = f"{self.base_url}/repos/{owner}/{repo}/actions/variables/{name}"
        response = self._session.get(url, timeout=self.timeout)
        if response.status_code == 404:
            raise GitHubVariableNotFoundError(
                f"Variable {name} not found in {owner}/{repo}", status_code=404
            )
        data = self._parse_json(response, expected_status=200)
        return Variable(name=str(data["name"]), value=str(data["value"]))

    def create_variable(self, owner: str, repo: str, name: str, value: str) -> None:
        url = f"{self.base_url}/repos/{owner}/{repo}/actions/variables"
        response = self._session.post(
            url, json={"name": name, "value": value}, timeout=self.timeout
        )
        self._ensure_ok(response, expected_status=201)

    def delete_variable(self, owner: str, repo: str, name: str) -> None:
        url = f"{self.base_url}/repos/{owner}/{repo}/actions/variables/{name}"
        response = self._session.delete(url, timeout=self.timeout)
        self._ensure_ok(response, expected_status=204)

    # Issues ----------------------------------------------------------------

    def get_ticket(self, owner: str, repo: str, number: int) -> Ticket:
        url = f"{self.base_url}/repos/{owner}/{repo}/issues/{number}"
        response = self._session.get(url, timeout=self.timeout)
        data = self._parse_json(response, expected_status=200)
        return Ticket(
            number=int(data.get("number", number)),
            title=str(data.get("title") or ""),
            body=str(data.get("body") or ""),
        )

    def update_ticket(self, owner: str, repo: str, number: int, *, body: str) -> None:
        url = f"{self.base_url}/repos/{owner}/{repo}/issues/{number}"
        response = self._session.patch(url, json={"body": body}, timeout=self.timeout)
        self._ensure_ok(response, expected_status=200)

    # Internal helpers ------------------------------------------------------

    def _paginate(
        self, url: Optional[str], params: Optional[dict[str, Any]]
    ) -> Iterator[MutableMapping[str, Any]]:
        while url:
            response = self._session.get(url, params=params, timeout=self.timeout)
            yield self._parse_json(response, expected_status=200)
            url = response.links.get("next", {}).get("url")
            # The next link already carries the query string.
            params = None

    def _parse_json(self, response: Response, *, expected_status: int) -> MutableMapping[str, Any]:
        self._ensure_ok(response, expected_status=expected_status)
        try:
            return response.json()  # type: ignore[return-value]
        except json.JSONDecodeError as exc:  # pragma: no cover - network edge case
            raise GitHubError(
                f"Invalid JSON response from {response.url}", status_code=response.status_code
            ) from exc

    def _ensure_ok(self, response: Response, *, expected_status: int) -> None:
        if response.status_code == expected_status:
            return
        detail: Any
        try:
            payload = response.json()
            detail = payload.get("message") or payload
        except Exception:  # pragma: no cover - fallback path
            detail = response.text
        raise GitHubError(
            f"Request to {response.url} failed with status {response.status_code}: {detail!r}",
            status_code=response.status_code,
        )
