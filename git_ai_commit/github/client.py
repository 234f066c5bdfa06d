"""GitHub API client for pull request operations."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from git_ai_commit.logging import get_logger

logger = get_logger("github")

BASE_GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"


class GitHubError(Exception):
    """Raised when the GitHub API rejects a request or can't be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None, errors: Optional[List[Any]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or []

    @property
    def details(self) -> str:
        """Top-level message plus any per-field validation messages."""
        parts = [self.message]
        for error in self.errors:
            if isinstance(error, dict) and error.get("message"):
                parts.append(str(error["message"]))
            elif isinstance(error, str):
                parts.append(error)
        return "; ".join(parts)


@dataclass
class PullRequest:
    """The parts of a GitHub pull request this tool reads."""

    number: int
    title: str
    body: str
    html_url: str
    head_ref: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "PullRequest":
        if not isinstance(data, dict):
            raise GitHubError(f"Unexpected pull request payload from GitHub: {type(data).__name__}")
        try:
            number = int(data["number"])
        except (KeyError, TypeError, ValueError):
            raise GitHubError(f"Pull request payload has no valid number: {data.get('number')!r}")
        head = data.get("head") if isinstance(data.get("head"), dict) else {}
        return cls(
            number=number,
            title=data.get("title") or "",
            body=data.get("body") or "",
            html_url=data.get("html_url") or "",
            head_ref=head.get("ref") or "",
        )


class GitHubClient:
    """Client for the GitHub REST API pulls endpoints."""

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        token: str,
        base_url: str = BASE_GITHUB_API_URL,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        if not token:
            raise GitHubError("No GitHub token. Set GH_ACCESS_TOKEN (or GITHUB_TOKEN).")
        self.base_url = base_url.rstrip("/")
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }
        self._http = httpx.Client(
            base_url=self.base_url,
            headers=self.headers,
            timeout=self.DEFAULT_TIMEOUT,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def list_pull_requests(self, owner: str, repo: str, head: Optional[str] = None) -> List[PullRequest]:
        """List open pull requests, optionally filtered by `head` ("owner:branch")."""
        params = {"state": "open"}
        if head:
            params["head"] = head
        data = self._request("GET", f"/repos/{owner}/{repo}/pulls", params=params)
        if data is None:
            return []
        if not isinstance(data, list):
            raise GitHubError("Expected a list of pull requests from GitHub")
        return [PullRequest.from_api(item) for item in data]

    def create_pull_request(self, owner: str, repo: str, *, title: str, body: str, head: str, base: str) -> PullRequest:
        payload = {"title": title, "body": body, "head": head, "base": base}
        data = self._request("POST", f"/repos/{owner}/{repo}/pulls", json=payload)
        return PullRequest.from_api(data)

    def update_pull_request(self, owner: str, repo: str, number: int, *, body: str) -> PullRequest:
        data = self._request("PATCH", f"/repos/{owner}/{repo}/pulls/{number}", json={"body": body})
        return PullRequest.from_api(data)

    def _request(self, method: str, path: str, **kwargs) -> Any:
        logger.debug("%s %s", method, path)
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise GitHubError(f"GitHub request failed: {e}")

        if response.is_success:
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError:
                raise GitHubError("Invalid JSON from GitHub", status_code=response.status_code)

        message = response.reason_phrase or "GitHub API error"
        errors: List[Any] = []
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            message = payload.get("message") or message
            errors = payload.get("errors") or []
        logger.debug("GitHub %s %s -> %d %s", method, path, response.status_code, message)
        raise GitHubError(message, status_code=response.status_code, errors=errors)
