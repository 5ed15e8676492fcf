"""Pytest configuration and shared fixtures for the html_injector test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from html_injector.pipeline import clear_conversion_cache

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "security: Security-focused tests for sanitization")
    config.addinivalue_line("markers", "fuzzing: Property-based fuzzing tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture(autouse=True)
def _fresh_conversion_cache():
    """Start every test with an empty conversion cache."""
    clear_conversion_cache()
    yield
    clear_conversion_cache()


@pytest.fixture
def sample_markup() -> str:
    """Markup exercising class, style, nesting and an event handler."""
    return '<p class="test-class" style="color: red; font-size: 16px;" onclick="alert(1)">Hello <strong>World</strong></p>'
