"""
Pytest configuration for grambrandt tests.
"""

import pytest


@pytest.fixture(autouse=True)
def disable_rate_limiting(settings):
    """Disable django-ratelimit for all tests to prevent test interference."""
    settings.RATELIMIT_ENABLE = False


@pytest.fixture(autouse=True)
def clear_feeds():
    """Start every test without any in-memory feeds."""
    from grambrandt.src.global_services import clear_feed_controllers

    clear_feed_controllers()
    yield
    clear_feed_controllers()
