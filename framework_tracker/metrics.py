"""Metrics sinks handed to the fetchers and the cycle dispatcher.

The fetchers never touch process-wide counters directly; they receive a
``MetricsSink`` so the service can export Prometheus counters while tests
substitute a recording or no-op sink.
"""

from typing import Protocol

from prometheus_client import CollectorRegistry, Counter, start_http_server

STACKOVERFLOW = "stackoverflow"
GITHUB = "github"


class MetricsSink(Protocol):
    """Counters updated during a fetch cycle."""

    def record_call(self, source: str, nbytes: int) -> None: ...

    def record_failure(self, source: str, kind: str) -> None: ...

    def record_cycle(self, outcome: str) -> None: ...


class NullMetrics:
    """Sink that discards everything."""

    def record_call(self, source: str, nbytes: int) -> None:
        pass

    def record_failure(self, source: str, kind: str) -> None:
        pass

    def record_cycle(self, outcome: str) -> None:
        pass


class PrometheusMetrics:
    """Sink backed by prometheus_client counters on a private registry."""

    def __init__(self, registry: CollectorRegistry | None = None):
        self.registry = registry or CollectorRegistry()
        self.api_calls = {
            GITHUB: Counter(
                "myapp_github_api_calls",
                "Total number of API calls to GitHub",
                registry=self.registry,
            ),
            STACKOVERFLOW: Counter(
                "myapp_stackoverflow_api_calls",
                "Total number of API calls to StackOverflow",
                registry=self.registry,
            ),
        }
        self.data_collected = Counter(
            "myapp_data_collected_bytes",
            "Total amount of data collected in bytes",
            ["source"],
            registry=self.registry,
        )
        self.fetch_failures = Counter(
            "myapp_fetch_failures",
            "Total number of failed API calls",
            ["source", "kind"],
            registry=self.registry,
        )
        self.fetch_cycles = Counter(
            "myapp_fetch_cycles",
            "Total number of fetch cycles by outcome",
            ["outcome"],
            registry=self.registry,
        )

    def record_call(self, source: str, nbytes: int) -> None:
        self.api_calls[source].inc()
        self.data_collected.labels(source=source).inc(nbytes)

    def record_failure(self, source: str, kind: str) -> None:
        self.fetch_failures.labels(source=source, kind=kind).inc()

    def record_cycle(self, outcome: str) -> None:
        self.fetch_cycles.labels(outcome=outcome).inc()

    def serve(self, port: int, addr: str = "0.0.0.0") -> None:
        """Expose ``/metrics`` on its own port in a daemon thread."""
        start_http_server(port, addr=addr, registry=self.registry)
