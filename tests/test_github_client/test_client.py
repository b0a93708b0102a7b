"""Tests for GitHub client."""

import httpx
import pytest

from framework_tracker.errors import (
    ConfigError,
    PermanentFetchError,
    TransientFetchError,
)
from framework_tracker.github_client.client import GitHubClient
from framework_tracker.github_client.models import GitHubIssue

from ..fakes import json_transport, raising_transport


def make_client(transport: httpx.BaseTransport) -> GitHubClient:
    return GitHubClient(token="test_token", transport=transport)


class TestGitHubClient:
    """Test GitHubClient class."""

    def test_init_without_token(self) -> None:
        """Test initialization without token raises error."""
        with pytest.raises(ConfigError, match="GitHub token is required"):
            GitHubClient(token=None)

    def test_headers(self) -> None:
        client = GitHubClient(token="test_token")

        assert client.headers["Authorization"] == "token test_token"
        assert client.headers["Accept"] == "application/vnd.github.v3+json"
        client.close()

    def test_list_issues_request(self) -> None:
        """One authenticated GET against the repository issues endpoint."""
        requests: list[httpx.Request] = []
        transport = json_transport({"/repos/golang/go/issues": []}, requests)

        with make_client(transport) as client:
            client.list_issues("golang/go")

        assert len(requests) == 1
        request = requests[0]
        assert request.method == "GET"
        assert str(request.url) == "https://api.github.com/repos/golang/go/issues"
        assert request.headers["Authorization"] == "token test_token"
        assert request.headers["Accept"] == "application/vnd.github.v3+json"

    def test_list_issues_decodes_array(self) -> None:
        payload = [
            {"id": 1, "title": "t", "body": "b", "number": 10, "state": "open"},
            {"id": 2, "title": "no body", "body": None},
        ]
        transport = json_transport({"/repos/golang/go/issues": payload})

        with make_client(transport) as client:
            page = client.list_issues("golang/go")

        assert page.items == [
            GitHubIssue(id=1, title="t", body="b"),
            GitHubIssue(id=2, title="no body", body=None),
        ]
        assert page.nbytes > 0

    def test_custom_base_url(self) -> None:
        requests: list[httpx.Request] = []
        transport = json_transport({"/api/v3/repos/o/r/issues": []}, requests)

        client = GitHubClient(
            token="test_token",
            base_url="https://ghe.example.com/api/v3/",
            transport=transport,
        )
        client.list_issues("o/r")

        assert str(requests[0].url) == "https://ghe.example.com/api/v3/repos/o/r/issues"

    def test_not_found_is_permanent(self) -> None:
        with make_client(json_transport({})) as client:
            with pytest.raises(PermanentFetchError, match="status code 404"):
                client.list_issues("missing/repo")

    @pytest.mark.parametrize("status", [429, 500, 502])
    def test_server_errors_are_transient(self, status: int) -> None:
        transport = json_transport(
            {"/repos/golang/go/issues": httpx.Response(status, text="nope")}
        )
        with make_client(transport) as client:
            with pytest.raises(TransientFetchError, match=f"status code {status}"):
                client.list_issues("golang/go")

    def test_timeout_is_transient(self) -> None:
        transport = raising_transport(
            lambda request: httpx.ReadTimeout("read timed out", request=request)
        )
        with make_client(transport) as client:
            with pytest.raises(TransientFetchError, match="timed out"):
                client.list_issues("golang/go")

    def test_connection_error_is_transient(self) -> None:
        transport = raising_transport(
            lambda request: httpx.ConnectError("connection refused", request=request)
        )
        with make_client(transport) as client:
            with pytest.raises(TransientFetchError) as exc_info:
                client.list_issues("golang/go")

        assert exc_info.value.source == "github"
        assert exc_info.value.target == "golang/go"
        assert exc_info.value.kind == "transient"

    def test_malformed_json(self) -> None:
        transport = json_transport({"/repos/golang/go/issues": b"[{not json"})
        with make_client(transport) as client:
            with pytest.raises(PermanentFetchError, match="malformed JSON"):
                client.list_issues("golang/go")

    def test_object_instead_of_array(self) -> None:
        transport = json_transport(
            {"/repos/golang/go/issues": {"message": "Moved Permanently"}}
        )
        with make_client(transport) as client:
            with pytest.raises(PermanentFetchError, match="expected a JSON array"):
                client.list_issues("golang/go")

    def test_issue_missing_required_field(self) -> None:
        transport = json_transport({"/repos/golang/go/issues": [{"title": "no id"}]})
        with make_client(transport) as client:
            with pytest.raises(PermanentFetchError, match="unexpected issue payload"):
                client.list_issues("golang/go")

    def test_renamed_repository_redirect_is_followed(self) -> None:
        """GitHub answers renamed repositories with 301 to the canonical URL."""
        requests: list[httpx.Request] = []
        transport = json_transport(
            {
                "/repos/docker/docker/issues": httpx.Response(
                    301,
                    headers={
                        "Location": "https://api.github.com/repositories/7691631/issues"
                    },
                ),
                "/repositories/7691631/issues": [{"id": 1, "title": "t", "body": "b"}],
            },
            requests,
        )

        with make_client(transport) as client:
            page = client.list_issues("docker/docker")

        assert page.items == [GitHubIssue(id=1, title="t", body="b")]
        assert [r.url.path for r in requests] == [
            "/repos/docker/docker/issues",
            "/repositories/7691631/issues",
        ]
        assert requests[1].headers["Authorization"] == "token test_token"
