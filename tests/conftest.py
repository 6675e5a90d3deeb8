"""Shared fixtures for Nestflow tests."""

import pytest

from nestflow.config.registry import HandlerRegistry
from nestflow.runtime.front_end import RecordingFrontEnd
from tests.mocks import StubParent


@pytest.fixture
def stub_parent() -> StubParent:
    return StubParent()


@pytest.fixture
def front_end() -> RecordingFrontEnd:
    return RecordingFrontEnd()


@pytest.fixture
def registry() -> HandlerRegistry:
    """Isolated registry (does not touch the default instance)."""
    return HandlerRegistry()


@pytest.fixture
def clean_default_registry():
    """Reset the default registry around a test."""
    HandlerRegistry.reset_default()
    yield HandlerRegistry.get_default()
    HandlerRegistry.reset_default()
