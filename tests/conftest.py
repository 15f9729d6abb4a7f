"""Shared pytest fixtures and configuration."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fakes import ISCAN_XML, FakeContainer, ventana_directories

from bifslide.config import Settings
from bifslide.utils.logging import clear_correlation_context, configure_logging


@pytest.fixture(autouse=True)
def reset_logging_context() -> Iterator[None]:
    """Reset correlation context between tests."""
    clear_correlation_context()
    yield
    clear_correlation_context()


@pytest.fixture
def test_settings() -> Settings:
    """Create a Settings instance with test-safe defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        LOG_LEVEL="DEBUG",
        LOG_FORMAT="console",
    )


@pytest.fixture
def configure_test_logging() -> Iterator[None]:
    """Configure logging for tests with console output."""
    configure_logging(level="DEBUG", log_format="console")
    yield


@pytest.fixture
def iscan_xml() -> str:
    """XML packet of a Ventana level-0 directory."""
    return ISCAN_XML


@pytest.fixture
def ventana_container() -> FakeContainer:
    """Fake container laid out like a Ventana slide."""
    return FakeContainer(ventana_directories())
