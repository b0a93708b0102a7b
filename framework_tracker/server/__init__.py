"""HTTP server and background cycle dispatch."""

from .app import create_app
from .dispatcher import CycleDispatcher

__all__ = ["CycleDispatcher", "create_app"]
