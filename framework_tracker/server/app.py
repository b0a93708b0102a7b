"""HTTP trigger surface for the collector."""

import logging

from fastapi import BackgroundTasks, FastAPI
from fastapi.responses import PlainTextResponse

from .. import __version__
from .dispatcher import CycleDispatcher

logger = logging.getLogger(__name__)


def create_app(dispatcher: CycleDispatcher) -> FastAPI:
    """Build the FastAPI application around a dispatcher."""
    app = FastAPI(
        title="Framework Tracker",
        description="Collects Stack Overflow questions and GitHub issues",
        version=__version__,
    )

    @app.get("/", response_class=PlainTextResponse)
    def index() -> str:
        return "Welcome to the Microservices Data Fetcher"

    @app.get("/fetch-data", response_class=PlainTextResponse)
    def fetch_data(background_tasks: BackgroundTasks) -> str:
        """Schedule a fetch cycle and return immediately."""
        background_tasks.add_task(dispatcher.run)
        logger.info("Fetch cycle scheduled")
        return "Data fetching initiated"

    @app.get("/healthz")
    def health_check() -> dict[str, str]:
        return {"status": "ok", "service": "framework-tracker"}

    return app
