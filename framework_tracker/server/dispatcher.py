"""Runs fetch cycles off the request path, one at a time."""

import logging
import threading
from collections.abc import Sequence

from ..collection.models import CycleReport
from ..collection.pipeline import run_fetch_cycle
from ..config import CollectorConfig
from ..github_client.client import GitHubClient
from ..metrics import MetricsSink, NullMetrics
from ..registry import FRAMEWORKS, TrackedFramework
from ..stackexchange.client import StackExchangeClient
from ..storage.manager import StorageManager

logger = logging.getLogger(__name__)


class CycleDispatcher:
    """Executes triggered cycles and reports their outcome through logs and metrics.

    Triggers never wait. A trigger that arrives while a cycle is running
    only marks a follow-up as pending and returns; the running thread picks
    it up once the current cycle ends. Any number of such triggers collapse
    into a single follow-up, so cycles never overlap and never pile up.
    """

    def __init__(
        self,
        config: CollectorConfig,
        storage: StorageManager,
        metrics: MetricsSink | None = None,
        frameworks: Sequence[TrackedFramework] = FRAMEWORKS,
    ):
        self.config = config
        self.storage = storage
        self.metrics = metrics or NullMetrics()
        self.frameworks = frameworks
        self._state_lock = threading.Lock()
        self._running = False
        self._rerun_pending = False

    @property
    def busy(self) -> bool:
        with self._state_lock:
            return self._running

    def run(self) -> CycleReport | None:
        """Run a cycle, or defer to the one already running.

        Returns:
            Report of the last cycle this call executed, or None if the call
            was folded into a running cycle or the cycle failed
        """
        with self._state_lock:
            if self._running:
                self._rerun_pending = True
                logger.info("A fetch cycle is already running; follow-up scheduled")
                return None
            self._running = True

        try:
            while True:
                report = self._run_and_record()
                with self._state_lock:
                    if not self._rerun_pending:
                        self._running = False
                        return report
                    self._rerun_pending = False
                logger.info("Starting follow-up fetch cycle")
        except BaseException:
            with self._state_lock:
                self._running = False
                self._rerun_pending = False
            raise

    def _run_and_record(self) -> CycleReport | None:
        """Run one cycle; failures are logged and counted, never raised."""
        logger.info("Starting fetch cycle")
        try:
            report = self._run_once()
        except Exception:
            logger.exception("Fetch cycle failed")
            self.metrics.record_cycle("failed")
            return None

        outcome = "success" if report.succeeded else "partial"
        self.metrics.record_cycle(outcome)
        logger.info(
            "Fetch cycle finished (%s): %d posts, %d issues, %d frameworks skipped",
            outcome,
            report.posts_stored,
            report.issues_stored,
            len(report.skipped),
        )
        return report

    def _run_once(self) -> CycleReport:
        with (
            StackExchangeClient(
                key=self.config.stackexchange_key,
                base_url=self.config.stackexchange_url,
                timeout=self.config.http_timeout,
            ) as stackexchange,
            GitHubClient(
                token=self.config.github_token,
                base_url=self.config.github_api_url,
                timeout=self.config.http_timeout,
            ) as github,
        ):
            return run_fetch_cycle(
                stackexchange,
                github,
                self.storage,
                metrics=self.metrics,
                frameworks=self.frameworks,
            )
