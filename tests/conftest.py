"""Pytest configuration for the trending digest tests."""

from unittest.mock import AsyncMock

import pytest


@pytest.fixture
def fake_sleep():
    """Stands in for asyncio.sleep so no test waits for real."""
    return AsyncMock()
