import httpx
import pytest
from git_commit_analyzer.github import (
    CommitDetail,
    GitHubClient,
    GitHubError,
    parse_repo_url,
)

COMMITS = [
    {
        "sha": "abcdef1234567890",
        "html_url": "https://github.com/octo/demo/commit/abcdef1",
        "commit": {
            "message": "feat: add login support\n\nLonger body text.",
            "author": {"name": "Ada", "date": "2024-01-02T03:04:05Z"},
            "committer": {"name": "GitHub", "date": "2024-01-02T03:05:00Z"},
        },
    },
    {
        "sha": "1234567890abcdef",
        "commit": {
            "message": "   \nbody without a subject",
            "author": None,
            "committer": {"name": "Bot", "date": "2024-01-01T00:00:00Z"},
        },
    },
    {"sha": "deadbeef", "commit": None},
    {
        "commit": {"message": "fix: handle empty payloads"},
    },
]

LANGUAGES = {"Python": 7500, "Shell": 2500}


def _client(handler, token=None, per_page=10):
    return GitHubClient(token=token, per_page=per_page, transport=httpx.MockTransport(handler))


def _ok_handler(requests):
    def handler(request):
        requests.append(request)
        if request.url.path.endswith("/commits"):
            return httpx.Response(200, json=COMMITS)
        if request.url.path.endswith("/languages"):
            return httpx.Response(200, json=LANGUAGES)
        return httpx.Response(404)

    return handler


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("https://github.com/pallets/click", ("pallets", "click")),
        ("https://github.com/pallets/click.git", ("pallets", "click")),
        ("https://github.com/pallets/click/tree/main", ("pallets", "click")),
        ("  http://github.com/pallets/click  ", ("pallets", "click")),
        ("github.com/pallets/click", ("pallets", "click")),
        ("pallets/click", ("pallets", "click")),
        ("git@github.com:pallets/click.git", ("pallets", "click")),
    ],
)
def test_parse_repo_url(raw, expected):
    assert parse_repo_url(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [None, "", "https://github.com/pallets", "https://github.com/", "not a url", "pallets/"],
)
def test_parse_repo_url_invalid(raw):
    assert parse_repo_url(raw) is None


def test_fetch_commits(monkeypatch):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    requests = []
    with _client(_ok_handler(requests)) as client:
        result = client.fetch_commits("https://github.com/octo/demo")

    assert result.messages == ["feat: add login support", "fix: handle empty payloads"]
    assert result.details == [
        CommitDetail(
            message="feat: add login support",
            author="Ada",
            date="2024-01-02T03:04:05Z",
            sha="abcdef1",
            url="https://github.com/octo/demo/commit/abcdef1",
        ),
        CommitDetail(
            message="(no subject)",
            author="Bot",
            date="2024-01-01T00:00:00Z",
            sha="1234567",
            url="",
        ),
        CommitDetail(
            message="fix: handle empty payloads",
            author="Unknown author",
            date="",
            sha="—",
            url="",
        ),
    ]
    assert result.languages == LANGUAGES

    commits_request = requests[0]
    assert commits_request.url.path == "/repos/octo/demo/commits"
    assert commits_request.url.params["per_page"] == "10"
    assert commits_request.headers["Accept"] == "application/vnd.github+json"
    assert "Authorization" not in commits_request.headers


def test_fetch_commits_sends_token():
    requests = []
    with _client(_ok_handler(requests), token="secret", per_page=5) as client:
        client.fetch_commits("octo/demo")

    assert requests[0].headers["Authorization"] == "Bearer secret"
    assert requests[0].url.params["per_page"] == "5"


def test_token_from_environment(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "from-env")
    requests = []
    with _client(_ok_handler(requests)) as client:
        client.fetch_commits("octo/demo")

    assert requests[0].headers["Authorization"] == "Bearer from-env"


def test_invalid_url():
    with _client(_ok_handler([])) as client:
        with pytest.raises(GitHubError, match="Invalid GitHub repository URL"):
            client.fetch_commits("not a url")


def test_api_error_status():
    def handler(request):
        return httpx.Response(404, json={"message": "Not Found"})

    with _client(handler) as client:
        with pytest.raises(GitHubError, match="GitHub API returned error: 404"):
            client.fetch_commits("octo/missing")


def test_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with _client(handler) as client:
        with pytest.raises(GitHubError, match="Could not fetch commits"):
            client.fetch_commits("octo/demo")


def test_unexpected_payload():
    def handler(request):
        return httpx.Response(200, json={"message": "oops"})

    with _client(handler) as client:
        with pytest.raises(GitHubError, match="Unexpected response"):
            client.fetch_commits("octo/demo")


def test_languages_failure_is_ignored():
    def handler(request):
        if request.url.path.endswith("/commits"):
            return httpx.Response(200, json=COMMITS)
        return httpx.Response(403)

    with _client(handler) as client:
        result = client.fetch_commits("octo/demo")

    assert result.languages == {}
    assert len(result.messages) == 2


def test_languages_transport_error_is_ignored():
    def handler(request):
        if request.url.path.endswith("/commits"):
            return httpx.Response(200, json=[])
        raise httpx.ReadTimeout("timed out", request=request)

    with _client(handler) as client:
        result = client.fetch_commits("octo/demo")

    assert result.messages == []
    assert result.languages == {}
