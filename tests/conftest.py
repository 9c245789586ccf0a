"""
Pytest configuration for tests at the root level.

This module contains pytest fixtures shared by the patience tests.
"""

import pytest

from patience.events import EventBus


# Reset event bus before each test
@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus.reset()
    yield
    EventBus.reset()
