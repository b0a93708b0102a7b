"""Per-framework fetch loops for both data sources.

Each loop walks the tracked frameworks in registry order, one request at a
time. A failed request only drops that framework from the run; the loop
logs it, counts it and moves on to the next framework.
"""

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

from pydantic import BaseModel

from ..errors import FetchError
from ..github_client.client import GitHubClient
from ..github_client.models import GitHubIssue
from ..metrics import GITHUB, STACKOVERFLOW, MetricsSink, NullMetrics
from ..registry import FRAMEWORKS, TrackedFramework
from ..stackexchange.client import StackExchangeClient
from ..stackexchange.models import StackOverflowPost
from ..transport import ApiPage
from .models import FetchResult, FrameworkSkip

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _collect(
    source: str,
    fetch_one: Callable[[TrackedFramework], ApiPage[M]],
    frameworks: Sequence[TrackedFramework],
    metrics: MetricsSink,
) -> FetchResult[M]:
    result: FetchResult[M] = FetchResult()

    for framework in frameworks:
        result.calls += 1
        try:
            page = fetch_one(framework)
        except FetchError as e:
            logger.warning("Skipping %s for %s: %s", framework.name, source, e)
            metrics.record_failure(source, e.kind)
            result.skipped.append(
                FrameworkSkip(
                    framework=framework.name,
                    source=source,
                    kind=e.kind,
                    reason=str(e),
                )
            )
            continue

        metrics.record_call(source, page.nbytes)
        result.items.extend(
            item.model_copy(update={"framework": framework.name})
            for item in page.items
        )
        logger.info(
            "Fetched %d %s items for %s (%d bytes)",
            len(page.items),
            source,
            framework.name,
            page.nbytes,
        )

    return result


def fetch_qna_data(
    client: StackExchangeClient,
    metrics: MetricsSink | None = None,
    frameworks: Sequence[TrackedFramework] = FRAMEWORKS,
) -> FetchResult[StackOverflowPost]:
    """Fetch the first page of Stack Overflow questions for every framework.

    Args:
        client: Stack Exchange client
        metrics: Sink for call, byte and failure counters
        frameworks: Frameworks to fetch, in order

    Returns:
        FetchResult with questions in registry order, then source order
    """
    return _collect(
        STACKOVERFLOW,
        lambda framework: client.search_posts(framework.stackoverflow_tag),
        frameworks,
        metrics or NullMetrics(),
    )


def fetch_issue_data(
    client: GitHubClient,
    metrics: MetricsSink | None = None,
    frameworks: Sequence[TrackedFramework] = FRAMEWORKS,
) -> FetchResult[GitHubIssue]:
    """Fetch the first page of GitHub issues for every framework.

    Args:
        client: GitHub client
        metrics: Sink for call, byte and failure counters
        frameworks: Frameworks to fetch, in order

    Returns:
        FetchResult with issues in registry order, then source order
    """
    return _collect(
        GITHUB,
        lambda framework: client.list_issues(framework.github_repo),
        frameworks,
        metrics or NullMetrics(),
    )
