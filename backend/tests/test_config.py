"""Tests for settings-dependent helpers."""

import pytest

from app.config import get_settings, sanitize_error


@pytest.fixture
def environment():
    settings = get_settings()
    previous = (settings.environment, settings.debug)
    yield settings
    settings.environment, settings.debug = previous


def test_sanitize_error_hides_details_by_default(environment):
    environment.environment = "development"
    environment.debug = False

    assert sanitize_error(RuntimeError("password=hunter2")) == "An internal error occurred."


def test_sanitize_error_shows_details_in_debug_development(environment):
    environment.environment = "development"
    environment.debug = True

    assert sanitize_error(RuntimeError("boom")) == "boom"


def test_sanitize_error_hides_details_in_production_even_with_debug(environment):
    environment.environment = "production"
    environment.debug = True

    assert sanitize_error(RuntimeError("boom"), generic_message="Try again") == "Try again"
