"""CLI command for running the trigger and metrics servers."""

import typer
import uvicorn
from rich.console import Console

from ..config import CollectorConfig
from ..errors import ConfigError, StorageError
from ..log import configure_logging
from ..metrics import PrometheusMetrics
from ..server.app import create_app
from ..server.dispatcher import CycleDispatcher
from ..storage.manager import StorageManager

console = Console()


def serve(
    port: int | None = typer.Option(
        None, "--port", "-p", help="HTTP port (defaults to SERVER_PORT or 3000)"
    ),
    metrics_port: int | None = typer.Option(
        None,
        "--metrics-port",
        help="Prometheus metrics port (defaults to METRICS_PORT or 9091)",
    ),
) -> None:
    """Serve the fetch trigger endpoint and Prometheus metrics."""
    try:
        config = CollectorConfig.from_env()
        config.validate_credentials()
        storage = StorageManager(config.database_url)
        storage.create_schema()
    except (ConfigError, StorageError) as e:
        console.print(f"❌ Error: {e}")
        raise typer.Exit(1)

    configure_logging(config.log_level)

    metrics = PrometheusMetrics()
    metrics.serve(metrics_port or config.metrics_port, addr=config.server_host)
    console.print(
        f"📈 Metrics on http://{config.server_host}:"
        f"{metrics_port or config.metrics_port}/metrics"
    )

    dispatcher = CycleDispatcher(config, storage, metrics)
    app = create_app(dispatcher)
    uvicorn.run(
        app,
        host=config.server_host,
        port=port or config.server_port,
        log_config=None,
    )
