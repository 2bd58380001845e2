"""
GitHub VCS provider implementation for GitGrade.

Fetches repository metadata from the GitHub REST API. The returned record is
passed unchanged to ``gitgrade.report.assemble``.
"""

import os
import re
from typing import Any

import httpx
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from gitgrade.config import get_api_url
from gitgrade.exceptions import RetrievalError
from gitgrade.http_client import _get_http_client
from gitgrade.vcs.base import BaseVCSProvider

# Load environment variables
load_dotenv()
console = Console(stderr=True)

_REPOSITORY_URL_PATTERN = re.compile(
    r"^(?:(?:https?://)?(?:www\.)?github\.com/)?"
    r"([A-Za-z0-9_.-]+)/([A-Za-z0-9_.-]+?)(?:\.git)?(?:[/?#].*)?$"
)

# Substituted for the fetched record when retrieval fails. Counts are zero,
# no license is assumed and timestamps are absent so they normalize to "now".
FALLBACK_RECORD: dict[str, Any] = {
    "name": None,
    "owner": None,
    "description": "Repository analysis",
    "stargazers_count": 0,
    "forks_count": 0,
    "watchers_count": 0,
    "open_issues_count": 0,
    "language": None,
    "topics": [],
    "created_at": None,
    "updated_at": None,
    "license": None,
    "has_readme": True,
    "has_contributing": False,
}


def parse_repository_url(value: str) -> tuple[str, str]:
    """
    Extract owner and repository name from a GitHub URL or ``owner/repo``.

    Args:
        value: e.g. ``https://github.com/psf/requests``,
               ``github.com/psf/requests.git`` or ``psf/requests``.

    Returns:
        Tuple of (owner, repo).

    Raises:
        ValueError: If the value does not identify a repository.
    """
    match = _REPOSITORY_URL_PATTERN.match(value.strip())
    if not match:
        raise ValueError(
            f"Not a GitHub repository: {value!r}. "
            "Expected https://github.com/owner/repo or owner/repo."
        )
    return match.group(1), match.group(2)


def fallback_record(owner: str, repo: str) -> dict[str, Any]:
    """Return FALLBACK_RECORD with the repository identity filled in."""
    record = dict(FALLBACK_RECORD)
    record["name"] = repo
    record["owner"] = {"login": owner}
    record["topics"] = []
    return record


class GitHubProvider(BaseVCSProvider):
    """GitHub VCS provider using the REST API."""

    def __init__(self, token: str | None = None, api_url: str | None = None):
        """
        Initialize GitHub provider.

        Args:
            token: GitHub Personal Access Token. If not provided, reads from
                   GITHUB_TOKEN environment variable. Anonymous access works
                   for public repositories at a lower rate limit.
            api_url: REST API base URL. Defaults to the configured URL.
        """
        self.token = token or os.getenv("GITHUB_TOKEN") or None
        self.api_url = (api_url or get_api_url()).rstrip("/")

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _get(self, path: str) -> dict[str, Any]:
        client = _get_http_client()
        try:
            response = client.get(f"{self.api_url}{path}", headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 404:
                raise RetrievalError(f"Repository not found: {path}") from e
            if status in (403, 429):
                raise RetrievalError(
                    "GitHub API rate limit exceeded or access denied. "
                    "Set GITHUB_TOKEN to raise the limit."
                ) from e
            raise RetrievalError(f"GitHub API returned {status} for {path}") from e
        except httpx.RequestError as e:
            raise RetrievalError(f"GitHub API request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise RetrievalError(f"GitHub API returned invalid JSON for {path}") from e
        if not isinstance(data, dict):
            raise RetrievalError(f"Unexpected GitHub API response for {path}")
        return data

    def get_repository_record(self, owner: str, repo: str) -> dict[str, Any]:
        """
        Fetch repository metadata from the GitHub REST API.

        The ``has_readme`` and ``has_contributing`` flags are taken from the
        community profile endpoint when it is available.

        Raises:
            RetrievalError: If the repository cannot be fetched.
        """
        record = self._get(f"/repos/{owner}/{repo}")

        try:
            community = self._get(f"/repos/{owner}/{repo}/community/profile")
        except RetrievalError as e:
            console.print(
                f"[dim]Note: Community profile unavailable ({escape(str(e))})[/dim]"
            )
            return record

        files = community.get("files") or {}
        record["has_readme"] = files.get("readme") is not None
        record["has_contributing"] = files.get("contributing") is not None
        return record


def fetch_repository_record(
    owner: str,
    repo: str,
    provider: BaseVCSProvider | None = None,
    use_fallback: bool = True,
) -> dict[str, Any]:
    """
    Fetch a repository record, falling back to FALLBACK_RECORD on failure.

    Args:
        owner: Repository owner.
        repo: Repository name.
        provider: Provider to use. Default: GitHubProvider().
        use_fallback: If False, retrieval errors are re-raised.

    Raises:
        RetrievalError: If retrieval fails and ``use_fallback`` is False.
    """
    provider = provider or GitHubProvider()
    try:
        return provider.get_repository_record(owner, repo)
    except RetrievalError as e:
        if not use_fallback:
            raise
        console.print(
            f"[yellow]⚠️  Unable to fetch {owner}/{repo}: {escape(str(e))}. "
            "Using the fallback profile.[/yellow]"
        )
        return fallback_record(owner, repo)
