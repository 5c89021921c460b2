"""Shared test fixtures for the assessment tax test suite."""

import pytest
from fastapi.testclient import TestClient

from assessment_tax.config.settings import Settings
from assessment_tax.domain.models.allowance_config import AllowanceRegistry
from assessment_tax.main import create_app

ADMIN_AUTH = ("adminTax", "admin!")


@pytest.fixture
def registry() -> AllowanceRegistry:
    """Fresh registry with the default caps."""
    return AllowanceRegistry()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(ADMIN_USERNAME=ADMIN_AUTH[0], ADMIN_PASSWORD=ADMIN_AUTH[1])


@pytest.fixture
def client(test_settings) -> TestClient:
    """TestClient over an app with its own registry, so cap updates don't leak."""
    return TestClient(create_app(test_settings))


@pytest.fixture
def admin_auth() -> tuple[str, str]:
    return ADMIN_AUTH
