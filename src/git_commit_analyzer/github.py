"""GitHub REST API client for fetching recent commits and language stats."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from urllib.parse import urlparse

import httpx

logger = logging.getLogger(__name__)

API_URL = "https://api.github.com"
TOKEN_ENV_VAR = "GITHUB_TOKEN"
DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 100

_SCHEME = re.compile(r"^https?://", re.IGNORECASE)
_SSH_REMOTE = re.compile(r"^[\w.-]+@[\w.-]+:(?P<path>.+)$")


class GitHubError(Exception):
    """Error while talking to the GitHub API."""

    pass


@dataclass
class CommitDetail:
    """Lightweight commit metadata shown in the timeline."""

    message: str
    author: str
    date: str
    sha: str
    url: str


@dataclass
class FetchResult:
    """Subjects, timeline details and language usage for one repository."""

    messages: list[str] = field(default_factory=list)
    details: list[CommitDetail] = field(default_factory=list)
    languages: dict[str, int] = field(default_factory=dict)


def parse_repo_url(raw_url: str | None) -> tuple[str, str] | None:
    """Parse a repository URL or shorthand into (owner, name).

    Accepts full URLs, ``github.com/owner/repo``, ``git@github.com:owner/repo.git``
    and the ``owner/repo`` shorthand.

    Returns:
        Tuple of (owner, name), or None if the value cannot be parsed
    """
    if not raw_url:
        return None

    url = raw_url.strip()
    ssh = _SSH_REMOTE.match(url)
    if ssh:
        path = ssh.group("path")
    elif _SCHEME.match(url):
        path = urlparse(url).path
    else:
        first = url.split("/", 1)[0]
        # A host name carries a dot; "owner/repo" does not
        path = urlparse(f"https://{url}").path if "." in first else url

    parts = path.lstrip("/").split("/")
    if len(parts) < 2:
        return None

    owner = parts[0]
    name = re.sub(r"\.git$", "", parts[1])
    if not owner or not name:
        return None
    return owner, name


def _commit_detail(entry: dict, subject: str) -> CommitDetail:
    commit = entry["commit"]
    author = commit.get("author") or {}
    committer = commit.get("committer") or {}
    sha = entry.get("sha")
    return CommitDetail(
        message=subject or "(no subject)",
        author=author.get("name") or committer.get("name") or "Unknown author",
        date=author.get("date") or committer.get("date") or "",
        sha=sha[:7] if sha else "—",
        url=entry.get("html_url") or "",
    )


class GitHubClient:
    """Read-only client for the GitHub REST API."""

    def __init__(
        self,
        token: str | None = None,
        per_page: int = DEFAULT_PER_PAGE,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            token: Personal access token (defaults to GITHUB_TOKEN env var)
            per_page: Number of recent commits to fetch
            transport: Optional httpx transport, mainly for tests
        """
        self.token = token or os.environ.get(TOKEN_ENV_VAR)
        self.per_page = per_page
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        else:
            logger.debug("No GitHub token configured, using anonymous access")
        self._client = httpx.Client(
            base_url=API_URL,
            headers=headers,
            timeout=30.0,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def fetch_commits(self, repo_url: str) -> FetchResult:
        """Fetch the latest commits and language usage of a repository.

        Args:
            repo_url: Repository URL or shorthand

        Returns:
            FetchResult with subjects, timeline details and languages

        Raises:
            GitHubError: If the URL is invalid or the commits request fails
        """
        parsed = parse_repo_url(repo_url)
        if not parsed:
            raise GitHubError("Invalid GitHub repository URL.")
        owner, name = parsed

        messages, details = self._fetch_commit_list(owner, name)
        languages = self.fetch_languages(owner, name)
        return FetchResult(messages=messages, details=details, languages=languages)

    def _fetch_commit_list(self, owner: str, name: str) -> tuple[list[str], list[CommitDetail]]:
        logger.debug("Fetching %d commits for %s/%s", self.per_page, owner, name)
        try:
            response = self._client.get(
                f"/repos/{owner}/{name}/commits",
                params={"per_page": self.per_page},
            )
        except httpx.HTTPError as e:
            raise GitHubError(f"Could not fetch commits from GitHub: {e}") from e

        if not response.is_success:
            raise GitHubError(f"GitHub API returned error: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise GitHubError("Unexpected response from GitHub commits API.") from e
        if not isinstance(data, list):
            raise GitHubError("Unexpected response from GitHub commits API.")

        messages: list[str] = []
        details: list[CommitDetail] = []
        for entry in data:
            if not isinstance(entry, dict) or not entry.get("commit"):
                continue
            message = entry["commit"].get("message") or ""
            subject = message.split("\n")[0].strip()
            if subject:
                messages.append(subject)
            details.append(_commit_detail(entry, subject))
        return messages, details

    def fetch_languages(self, owner: str, name: str) -> dict[str, int]:
        """Fetch language usage in bytes. Returns an empty mapping on failure."""
        try:
            response = self._client.get(f"/repos/{owner}/{name}/languages")
            if not response.is_success:
                logger.debug("Languages request returned %s", response.status_code)
                return {}
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.debug("Languages request failed: %s", e)
            return {}
        return data if isinstance(data, dict) else {}
