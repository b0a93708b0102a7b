"""Stack Exchange search API client using httpx."""

import logging

import httpx
from pydantic import ValidationError

from ..errors import PermanentFetchError
from ..metrics import STACKOVERFLOW
from ..transport import USER_AGENT, ApiPage, get_json
from .models import SearchResponse, StackOverflowPost

logger = logging.getLogger(__name__)

SEARCH_PATH = "/2.3/search/advanced"


class StackExchangeClient:
    """Searches Stack Overflow questions by tag."""

    def __init__(
        self,
        key: str | None = None,
        base_url: str = "https://api.stackexchange.com",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.key = key
        self.base_url = base_url.rstrip("/")
        self.http = httpx.Client(
            headers={"User-Agent": USER_AGENT},
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
        )

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "StackExchangeClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def build_params(self, tag: str) -> dict[str, str]:
        """Query parameters for a most-recently-active search on one tag."""
        params = {
            "order": "desc",
            "sort": "activity",
            "tagged": tag,
            "site": "stackoverflow",
            "filter": "withbody",
        }
        if self.key:
            params["key"] = self.key
        return params

    def search_posts(self, tag: str) -> ApiPage[StackOverflowPost]:
        """Get the first page of questions tagged with ``tag``.

        Only the first page is requested; ``has_more`` is logged but not
        followed.

        Raises:
            FetchError: If the request fails or the envelope has no items
        """
        url = f"{self.base_url}{SEARCH_PATH}"
        logger.info("Searching Stack Overflow for tag %s", tag)

        payload, nbytes = get_json(
            self.http,
            url,
            source=STACKOVERFLOW,
            target=tag,
            params=self.build_params(tag),
        )

        try:
            result = SearchResponse.model_validate(payload)
        except ValidationError as e:
            raise PermanentFetchError(
                STACKOVERFLOW,
                tag,
                f"unexpected search payload: {e.error_count()} errors",
            ) from e

        if result.has_more:
            logger.debug("Tag %s has more results beyond the first page", tag)

        return ApiPage(items=result.items, nbytes=nbytes)
