"""Shared fixtures for the RecGate tests.

Injects a recording stand-in for the engine client into the application
through ``create_app``.
"""

import pytest
from fastapi.testclient import TestClient

from fakes import RecordingEngineClient
from recgate.api.main import create_app
from recgate.config import GatewaySettings


@pytest.fixture
def settings() -> GatewaySettings:
    return GatewaySettings(port=6666, engine_endpoint="http://engine.test:8088", engine_api_key="secret")


@pytest.fixture
def engine() -> RecordingEngineClient:
    return RecordingEngineClient(recommendations=["i1", "i2", "i3"])


@pytest.fixture
def app(settings, engine):
    return create_app(settings=settings, engine_client=engine)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def failing_client(settings):
    """Build a test client whose engine raises ``error`` on every call."""

    def _build(error: Exception, raise_server_exceptions: bool = True):
        engine = RecordingEngineClient(error=error)
        app = create_app(settings=settings, engine_client=engine)
        return engine, TestClient(app, raise_server_exceptions=raise_server_exceptions)

    return _build
