"""Pytest configuration and shared fixtures."""

pytest_plugins = [
    "tests.fixtures.filesystem",
    "tests.fixtures.templates",
    "tests.fixtures.api",
]
