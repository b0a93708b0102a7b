"""CLI commands for running a fetch cycle and inspecting storage."""

import typer
from rich.console import Console
from rich.table import Table

from ..collection.pipeline import run_fetch_cycle
from ..config import CollectorConfig
from ..errors import ConfigError, StorageError
from ..github_client.client import GitHubClient
from ..log import configure_logging
from ..registry import FRAMEWORKS, get_framework
from ..stackexchange.client import StackExchangeClient
from ..storage.manager import StorageManager

console = Console()


def fetch(
    framework: list[str] | None = typer.Option(
        None,
        "--framework",
        "-f",
        help="Only fetch these frameworks (can be used multiple times)",
    ),
) -> None:
    """Run one fetch cycle now and store the results.

    Examples:
        framework-tracker fetch
        framework-tracker fetch -f Go -f Docker
    """
    try:
        config = CollectorConfig.from_env()
        config.validate_credentials()
        configure_logging(config.log_level)

        selected = (
            tuple(get_framework(name) for name in framework)
            if framework
            else FRAMEWORKS
        )
    except (ConfigError, KeyError) as e:
        console.print(f"❌ Error: {e}")
        raise typer.Exit(1)

    console.print(
        f"🔎 Fetching {len(selected)} frameworks: "
        + ", ".join(f.name for f in selected)
    )

    try:
        storage = StorageManager(config.database_url)
        storage.create_schema()
        with (
            StackExchangeClient(
                key=config.stackexchange_key,
                base_url=config.stackexchange_url,
                timeout=config.http_timeout,
            ) as stackexchange,
            GitHubClient(
                token=config.github_token,
                base_url=config.github_api_url,
                timeout=config.http_timeout,
            ) as github,
        ):
            report = run_fetch_cycle(
                stackexchange, github, storage, frameworks=selected
            )
    except StorageError as e:
        console.print(f"❌ Storage error: {e}")
        raise typer.Exit(1)

    results_table = Table(title="Fetch Results")
    results_table.add_column("Source", style="cyan")
    results_table.add_column("Fetched", justify="right", style="green")
    results_table.add_column("Stored", justify="right", style="yellow")
    results_table.add_row(
        "Stack Overflow", str(report.posts_fetched), str(report.posts_stored)
    )
    results_table.add_row(
        "GitHub",
        str(report.issues_fetched),
        f"{report.issues_created} new / {report.issues_updated} updated",
    )
    console.print(results_table)

    if report.skipped:
        skipped_table = Table(title="Skipped Frameworks")
        skipped_table.add_column("Framework", style="cyan")
        skipped_table.add_column("Source", style="magenta")
        skipped_table.add_column("Kind", style="yellow")
        skipped_table.add_column("Reason", style="white")
        for skip in report.skipped:
            skipped_table.add_row(skip.framework, skip.source, skip.kind, skip.reason)
        console.print(skipped_table)
        console.print(f"⚠️  {len(report.skipped)} fetches skipped")
    else:
        console.print("✨ Fetch cycle completed without errors")


def status() -> None:
    """Show storage status and statistics."""
    console.print("📊 Storage Status")

    try:
        config = CollectorConfig.from_env()
        storage = StorageManager(config.database_url)
        storage.create_schema()
        stats = storage.get_storage_stats()
    except (ConfigError, StorageError) as e:
        console.print(f"❌ Error: {e}")
        raise typer.Exit(1)

    stats_table = Table(title="Storage Statistics")
    stats_table.add_column("Metric", style="cyan")
    stats_table.add_column("Value", style="green")

    stats_table.add_row("Stack Overflow Rows", str(stats["total_posts"]))
    stats_table.add_row("Distinct Questions", str(stats["distinct_questions"]))
    stats_table.add_row("GitHub Issues", str(stats["total_issues"]))
    stats_table.add_row("Database", stats["database"])

    console.print(stats_table)

    if stats["frameworks"]:
        framework_table = Table(title="Records by Framework")
        framework_table.add_column("Framework", style="cyan")
        framework_table.add_column("Posts", justify="right", style="green")
        framework_table.add_column("Issues", justify="right", style="green")

        for name, counts in sorted(stats["frameworks"].items()):
            framework_table.add_row(name, str(counts["posts"]), str(counts["issues"]))

        console.print(framework_table)
    else:
        console.print("No records found in storage.")


def frameworks() -> None:
    """List the tracked frameworks."""
    table = Table(title="Tracked Frameworks")
    table.add_column("Name", style="cyan")
    table.add_column("Stack Overflow Tag", style="green")
    table.add_column("GitHub Repository", style="magenta")

    for tracked in FRAMEWORKS:
        table.add_row(tracked.name, tracked.stackoverflow_tag, tracked.github_repo)

    console.print(table)
