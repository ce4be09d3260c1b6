"""Shared fixtures for commandus tests."""

from __future__ import annotations

import pytest

from commandus.correlation import set_correlation_id


@pytest.fixture(autouse=True)
def _clear_correlation_id():
    """Start and finish every test without an active correlation ID."""
    set_correlation_id(None)
    yield
    set_correlation_id(None)
