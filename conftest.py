"""Shared pytest fixtures."""

import pytest
from starlette.testclient import TestClient

from api.app import create_app
from rollup.config import RollupConfig


@pytest.fixture
def rollup_app():
    return create_app()


@pytest.fixture
def server(rollup_app):
    return TestClient(rollup_app)


@pytest.fixture
def config():
    return RollupConfig(server_url="http://testserver", max_retries=2, backoff_base=0.01)
