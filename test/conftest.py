"""Pytest configuration for lql tests."""

import sys
from pathlib import Path

import pytest

# Add src directory to path so we can import lql without installing it
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from lql.registry import CategoryRegistry  # noqa: E402


@pytest.fixture
def registry() -> CategoryRegistry:
    """Fixture that provides the built-in registry."""
    return CategoryRegistry.default()


@pytest.fixture
def empty_registry() -> CategoryRegistry:
    """Fixture that provides a registry without function names."""
    return CategoryRegistry.empty()
