"""Global test configuration and fixtures."""

import pytest

from azure_fluent_sdk.common.sync_adapter import EventLoopThread


@pytest.fixture
def runner():
    """Background event loop thread, closed after the test."""
    loop_thread = EventLoopThread(name="test-sync-loop")
    yield loop_thread
    loop_thread.close()
