"""GitHub API Package"""

from changelog_gen.github.client import GitHubClient, GitHubError, commit_from_payload, resolve_login

__all__ = [
    "GitHubClient",
    "GitHubError",
    "commit_from_payload",
    "resolve_login",
]
