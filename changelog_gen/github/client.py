"""GitHub Client - fetch commits, releases, tags and branches over the REST API."""

import logging
from typing import Optional

import requests

from changelog_gen.engine import UNKNOWN_LOGIN, CommitRecord, first_line

logger = logging.getLogger(__name__)

API_BASE = "https://api.github.com"
DEFAULT_TIMEOUT = 30


class GitHubError(Exception):
    """Raised when a GitHub API request fails."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


def resolve_login(data: dict) -> str:
    """Pick the login for a commit payload: author, then committer, then '-'.

    The top-level ``author``/``committer`` objects are GitHub accounts and are
    null when the git identity is not linked to one.
    """
    for key in ("author", "committer"):
        account = data.get(key)
        if account and account.get("login"):
            return account["login"]
    return UNKNOWN_LOGIN


def commit_from_payload(data: dict) -> CommitRecord:
    """Convert one commit object of the compare/commits API to a CommitRecord."""
    commit = data.get("commit") or {}
    git_author = commit.get("author") or {}
    return CommitRecord(
        subject=first_line(commit.get("message", "")),
        hash=data.get("sha", ""),
        author_login=resolve_login(data),
        author_name=git_author.get("name"),
    )


class GitHubClient:
    """Thin wrapper over the handful of REST endpoints the changelog needs."""

    def __init__(self, repository: str, token: Optional[str] = None,
                 api_base: str = API_BASE, session: Optional[requests.Session] = None):
        if not repository or repository.count('/') != 1:
            raise GitHubError(f"Repository must look like 'owner/repo', got {repository!r}")
        self.repository = repository
        self.api_base = api_base.rstrip('/')
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        })
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _request(self, endpoint: str, params: Optional[dict] = None):
        """GET a repository endpoint and return the decoded JSON body."""
        url = f"{self.api_base}/repos/{self.repository}{endpoint}"
        try:
            response = self.session.get(url, params=params or None, timeout=DEFAULT_TIMEOUT)
        except requests.RequestException as e:
            raise GitHubError(f"Request to {url} failed: {e}") from e

        if response.status_code != 200:
            try:
                detail = response.json().get("message", "")
            except (ValueError, AttributeError):
                detail = response.text
            raise GitHubError(
                f"GitHub API error for {self.repository}{endpoint} (status={response.status_code}) {detail}".rstrip(),
                status=response.status_code,
            )
        logger.debug("GET %s -> %d", url, response.status_code)
        try:
            return response.json()
        except ValueError as e:
            raise GitHubError(
                f"GitHub API returned a non-JSON body for {self.repository}{endpoint}: {e}",
                status=response.status_code,
            ) from e

    def compare_commits(self, base: str, head: str) -> list[CommitRecord]:
        """Commits in base...head, oldest first (base excluded, head included)."""
        data = self._request(f"/compare/{base}...{head}")
        commits = [commit_from_payload(item) for item in data.get("commits", [])]
        logger.info("Compared %s...%s: %d commit(s)", base, head, len(commits))
        return commits

    def path_commits(self, path: str) -> list[CommitRecord]:
        """Commits touching ``path``, oldest first."""
        data = self._request("/commits", params={"path": path})
        # The commits endpoint lists newest first
        commits = [commit_from_payload(item) for item in reversed(data)]
        logger.info("Fetched %d commit(s) for path %s", len(commits), path)
        return commits

    def latest_release_tag(self) -> str:
        try:
            data = self._request("/releases/latest")
        except GitHubError as e:
            raise GitHubError(
                f"There are no releases on {self.repository}. Tags are not releases. ({e})",
                status=e.status,
            ) from e
        tag = data.get("tag_name", "")
        logger.info("Latest release: %s", tag)
        return tag

    def latest_tag(self) -> str:
        """Name of the most recent tag, or an empty string if there are none."""
        data = self._request("/tags")
        return data[0].get("name", "") if data else ""

    def branch_sha(self, name: str) -> Optional[str]:
        """Head commit of a branch, or None if the branch does not exist."""
        for branch in self._request("/branches"):
            if branch.get("name") == name:
                return (branch.get("commit") or {}).get("sha")
        return None
