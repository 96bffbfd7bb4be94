"""Pytest configuration and shared fixtures for the styledmark test suite."""

import base64
from io import BytesIO

import pytest
from PIL import Image


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture(autouse=True)
def _network_enabled(monkeypatch):
    """Make sure a developer's environment does not switch the network handler off."""
    monkeypatch.delenv("STYLEDMARK_DISABLE_NETWORK", raising=False)


@pytest.fixture
def png_bytes() -> bytes:
    """A 3x2 RGB PNG image."""
    buffer = BytesIO()
    Image.new("RGB", (3, 2), color=(200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_data_uri(png_bytes) -> str:
    """The PNG fixture as a base64 data URI."""
    return "data:image/png;base64," + base64.b64encode(png_bytes).decode("ascii")
