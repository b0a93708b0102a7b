"""Collection pipeline: per-source fetch loops and the fetch-store cycle."""

from .fetchers import fetch_issue_data, fetch_qna_data
from .models import CycleReport, FetchResult, FrameworkSkip
from .pipeline import run_fetch_cycle

__all__ = [
    "CycleReport",
    "FetchResult",
    "FrameworkSkip",
    "fetch_issue_data",
    "fetch_qna_data",
    "run_fetch_cycle",
]
