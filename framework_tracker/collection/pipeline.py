"""Fetch-then-store cycle over both data sources."""

import logging
from collections.abc import Sequence

from ..github_client.client import GitHubClient
from ..metrics import MetricsSink, NullMetrics
from ..registry import FRAMEWORKS, TrackedFramework
from ..stackexchange.client import StackExchangeClient
from ..storage.manager import StorageManager
from .fetchers import fetch_issue_data, fetch_qna_data
from .models import CycleReport

logger = logging.getLogger(__name__)


def run_fetch_cycle(
    stackexchange: StackExchangeClient,
    github: GitHubClient,
    storage: StorageManager,
    metrics: MetricsSink | None = None,
    frameworks: Sequence[TrackedFramework] = FRAMEWORKS,
) -> CycleReport:
    """Fetch and store Stack Overflow posts, then GitHub issues.

    Every record is committed on its own, so a failure partway through
    leaves whatever was already stored in place.

    Raises:
        StorageError: If any write fails; the rest of the run is abandoned
    """
    metrics = metrics or NullMetrics()
    report = CycleReport()

    posts = fetch_qna_data(stackexchange, metrics, frameworks)
    report.posts_fetched = len(posts.items)
    report.skipped.extend(posts.skipped)
    for post in posts.items:
        storage.store_qna_post(post)
        report.posts_stored += 1
    logger.info("Stored %d Stack Overflow posts", report.posts_stored)

    issues = fetch_issue_data(github, metrics, frameworks)
    report.issues_fetched = len(issues.items)
    report.skipped.extend(issues.skipped)
    for issue in issues.items:
        if storage.store_repo_issue(issue):
            report.issues_created += 1
        else:
            report.issues_updated += 1
    logger.info(
        "Stored %d GitHub issues (%d new, %d updated)",
        report.issues_stored,
        report.issues_created,
        report.issues_updated,
    )

    return report
