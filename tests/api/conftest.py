"""Fixtures running the FastAPI app in-process."""

import pytest
from fastapi.testclient import TestClient
from helpers import make_config

from palapizza.app import App
from palapizza.web.server import create_fastapi_app


@pytest.fixture
def make_client():
    """Build a TestClient for the given settings overrides, use it as a context manager."""

    def _make(**overrides) -> TestClient:
        config = make_config(**overrides)
        return TestClient(create_fastapi_app(App(config), config))

    return _make


@pytest.fixture
def client(make_client):
    with make_client() as client:
        yield client
