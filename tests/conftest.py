"""Shared pytest configuration."""

from typing import Any


def pytest_configure(config: Any) -> None:
    """Register the markers used across the suite."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "critical_path: Core functionality tests")
    config.addinivalue_line("markers", "smoke: Basic smoke tests")
