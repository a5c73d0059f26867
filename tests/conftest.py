"""
Pytest configuration and shared fixtures for Polaris SDK tests.
"""

from collections.abc import Generator
from pathlib import Path

import pytest

SERVICE_ACCOUNT_ENV = (
    "RUBRIK_POLARIS_SERVICEACCOUNT_FILE",
    "RUBRIK_POLARIS_SERVICEACCOUNT_CREDENTIALS",
    "RUBRIK_POLARIS_SERVICEACCOUNT_NAME",
    "RUBRIK_POLARIS_SERVICEACCOUNT_CLIENTID",
    "RUBRIK_POLARIS_SERVICEACCOUNT_CLIENTSECRET",
    "RUBRIK_POLARIS_SERVICEACCOUNT_ACCESSTOKENURI",
)


# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[pytest.MonkeyPatch, None, None]:
    """Remove SDK environment variables for the duration of a test."""
    for name in (*SERVICE_ACCOUNT_ENV, "POLARIS_SDK_CONFIG"):
        monkeypatch.delenv(name, raising=False)
    yield monkeypatch


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "property: Property-based tests")
