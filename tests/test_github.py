"""
Unit tests for the GitHub client. HTTP is replaced by a fake session.

Run with:
    pytest tests/test_github.py -v
"""

import pytest
import requests

from changelog_gen.engine import CommitRecord
from changelog_gen.github import GitHubClient, GitHubError, commit_from_payload, resolve_login


class FakeResponse:
    def __init__(self, status_code=200, data=None, text=""):
        self.status_code = status_code
        self._data = data
        self.text = text

    def json(self):
        if self._data is None:
            raise ValueError("No JSON")
        return self._data


class FakeSession:
    """Records GET calls and answers from a path -> response table."""

    def __init__(self, routes=None, error=None):
        self.headers = {}
        self.routes = routes or {}
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.error:
            raise self.error
        for suffix, response in self.routes.items():
            if url.endswith(suffix):
                return response
        return FakeResponse(404, {"message": "Not Found"})


def _payload(sha, message, author=None, committer=None, name="Alice Example"):
    return {
        "sha": sha,
        "commit": {"message": message, "author": {"name": name}},
        "author": author,
        "committer": committer,
    }


@pytest.fixture
def make_client():
    def _make(routes=None, error=None, token=None):
        session = FakeSession(routes, error)
        return GitHubClient("owner/repo", token=token, session=session), session
    return _make


# ---------------------------------------------------------------------------
# Payload conversion
# ---------------------------------------------------------------------------

class TestResolveLogin:

    @pytest.mark.parametrize("author, committer, expected", [
        ({"login": "alice"}, {"login": "web-flow"}, "alice"),
        (None, {"login": "web-flow"}, "web-flow"),
        ({}, {"login": "bob"}, "bob"),
        (None, None, "-"),
        ({"login": ""}, None, "-"),
    ])
    def test_resolution_order(self, author, committer, expected):
        assert resolve_login({"author": author, "committer": committer}) == expected


class TestCommitFromPayload:

    def test_uses_subject_only(self):
        record = commit_from_payload(_payload("a" * 40, "feat: add x\n\nLonger body", author={"login": "alice"}))
        assert record == CommitRecord(subject="feat: add x", hash="a" * 40, author_login="alice",
                                      author_name="Alice Example")
        assert record.short_hash == "aaaaaaa"

    def test_missing_fields(self):
        record = commit_from_payload({"sha": "b" * 40})
        assert record.subject == ""
        assert record.author_login == "-"
        assert record.author_name is None


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class TestGitHubClient:

    def test_rejects_bad_repository(self):
        with pytest.raises(GitHubError):
            GitHubClient("not-a-repo", session=FakeSession())

    def test_token_sets_authorization(self, make_client):
        _, session = make_client(token="secret")
        assert session.headers["Authorization"] == "Bearer secret"
        assert session.headers["Accept"] == "application/vnd.github+json"

    def test_no_token_no_authorization(self, make_client):
        _, session = make_client()
        assert "Authorization" not in session.headers

    def test_compare_commits(self, make_client):
        data = {"commits": [
            _payload("a" * 40, "feat: one", author={"login": "alice"}),
            _payload("b" * 40, "fix: two", committer={"login": "bob"}),
        ]}
        client, session = make_client({"/compare/v1.0.0...main": FakeResponse(200, data)})

        commits = client.compare_commits("v1.0.0", "main")

        assert [c.subject for c in commits] == ["feat: one", "fix: two"]
        assert [c.author_login for c in commits] == ["alice", "bob"]
        url, _, timeout = session.calls[0]
        assert url == "https://api.github.com/repos/owner/repo/compare/v1.0.0...main"
        assert timeout == 30

    def test_path_commits_oldest_first(self, make_client):
        data = [_payload("b" * 40, "fix: newer"), _payload("a" * 40, "feat: older")]
        client, session = make_client({"/commits": FakeResponse(200, data)})

        commits = client.path_commits("docs")

        assert [c.subject for c in commits] == ["feat: older", "fix: newer"]
        assert session.calls[0][1] == {"path": "docs"}

    def test_error_status_raises(self, make_client):
        client, _ = make_client({"/compare/a...b": FakeResponse(404, {"message": "Not Found"})})
        with pytest.raises(GitHubError) as exc:
            client.compare_commits("a", "b")
        assert exc.value.status == 404
        assert "Not Found" in str(exc.value)

    def test_error_without_json_body(self, make_client):
        client, _ = make_client({"/tags": FakeResponse(502, None, text="Bad gateway")})
        with pytest.raises(GitHubError, match="Bad gateway"):
            client.latest_tag()

    def test_non_json_success_body_raises(self, make_client):
        client, _ = make_client({"/tags": FakeResponse(200, None, text="<html>proxy</html>")})
        with pytest.raises(GitHubError, match="non-JSON body") as exc:
            client.latest_tag()
        assert exc.value.status == 200
        assert isinstance(exc.value.__cause__, ValueError)

    def test_network_error_raises(self, make_client):
        error = requests.ConnectionError("boom")
        client, _ = make_client(error=error)
        with pytest.raises(GitHubError, match="boom") as exc:
            client.latest_tag()
        assert exc.value.__cause__ is error

    def test_latest_release_tag(self, make_client):
        client, _ = make_client({"/releases/latest": FakeResponse(200, {"tag_name": "v1.4.0"})})
        assert client.latest_release_tag() == "v1.4.0"

    def test_no_release(self, make_client):
        client, _ = make_client()
        with pytest.raises(GitHubError, match="There are no releases on owner/repo") as exc:
            client.latest_release_tag()
        assert exc.value.status == 404
        assert isinstance(exc.value.__cause__, GitHubError)

    def test_latest_tag(self, make_client):
        client, _ = make_client({"/tags": FakeResponse(200, [{"name": "v2.0.0"}, {"name": "v1.0.0"}])})
        assert client.latest_tag() == "v2.0.0"

    def test_latest_tag_none(self, make_client):
        client, _ = make_client({"/tags": FakeResponse(200, [])})
        assert client.latest_tag() == ""

    def test_branch_sha(self, make_client):
        branches = [
            {"name": "main", "commit": {"sha": "1" * 40}},
            {"name": "gh-pages", "commit": {"sha": "2" * 40}},
        ]
        client, _ = make_client({"/branches": FakeResponse(200, branches)})
        assert client.branch_sha("gh-pages") == "2" * 40
        assert client.branch_sha("missing") is None
