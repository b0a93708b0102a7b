"""Test configuration and fixtures."""

import pytest

from framework_tracker.storage.manager import StorageManager

from .fakes import RecordingMetrics


@pytest.fixture
def storage() -> StorageManager:
    """In-memory SQLite storage with the schema created."""
    manager = StorageManager("sqlite://")
    manager.create_schema()
    return manager


@pytest.fixture
def metrics() -> RecordingMetrics:
    return RecordingMetrics()
