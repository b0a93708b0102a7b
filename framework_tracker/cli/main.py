"""Main CLI entry point."""

import typer
from dotenv import load_dotenv
from rich.console import Console

from .fetch import fetch, frameworks, status
from .serve import serve

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="framework-tracker",
    help="Stack Overflow and GitHub collector for tracked frameworks",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


app.command(name="fetch", context_settings={"help_option_names": ["-h", "--help"]})(
    fetch
)
app.command(name="status", context_settings={"help_option_names": ["-h", "--help"]})(
    status
)
app.command(
    name="frameworks", context_settings={"help_option_names": ["-h", "--help"]}
)(frameworks)
app.command(name="serve", context_settings={"help_option_names": ["-h", "--help"]})(
    serve
)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from framework_tracker import __version__

    console.print(f"Framework Tracker v{__version__}")


if __name__ == "__main__":
    app()
