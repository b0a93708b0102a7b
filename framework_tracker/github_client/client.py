"""GitHub REST API client using httpx."""

import logging

import httpx
from pydantic import TypeAdapter, ValidationError

from ..errors import ConfigError, PermanentFetchError
from ..metrics import GITHUB
from ..transport import USER_AGENT, ApiPage, get_json
from .models import GitHubIssue

logger = logging.getLogger(__name__)

_ISSUE_LIST = TypeAdapter(list[GitHubIssue])


class GitHubClient:
    """Fetches repository issues with token authentication."""

    def __init__(
        self,
        token: str | None,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize GitHub client with authentication.

        Args:
            token: GitHub personal access token
            base_url: API root, overridable for GitHub Enterprise
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        if not token:
            raise ConfigError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )

        self.token = token
        self.base_url = base_url.rstrip("/")
        self.headers = {
            "Authorization": f"token {token}",
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": USER_AGENT,
        }
        self.http = httpx.Client(
            headers=self.headers,
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
        )

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def list_issues(self, repo: str) -> ApiPage[GitHubIssue]:
        """Get the first page of issues for a repository.

        Args:
            repo: Repository as owner/repo

        Returns:
            ApiPage with issues in the order GitHub returned them

        Raises:
            FetchError: If the request fails or the payload is not an issue array
        """
        url = f"{self.base_url}/repos/{repo}/issues"
        logger.info("Fetching URL: %s", url)

        payload, nbytes = get_json(self.http, url, source=GITHUB, target=repo)
        if not isinstance(payload, list):
            raise PermanentFetchError(
                GITHUB, repo, f"expected a JSON array, got {type(payload).__name__}"
            )

        try:
            issues = _ISSUE_LIST.validate_python(payload)
        except ValidationError as e:
            raise PermanentFetchError(
                GITHUB, repo, f"unexpected issue payload: {e.error_count()} errors"
            ) from e

        return ApiPage(items=issues, nbytes=nbytes)
