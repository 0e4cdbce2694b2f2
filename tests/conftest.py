import pytest
from fastapi.testclient import TestClient

from datasource.config import Settings
from datasource.main import create_app

USER = "grafana"
PASSWORD = "s3cret"


@pytest.fixture
def settings():
    return Settings(http_user=USER, http_pass=PASSWORD)


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))


@pytest.fixture
def auth():
    return (USER, PASSWORD)
