import base64

import pytest
from fastapi.testclient import TestClient

from datasource.auth import parse_basic
from datasource.config import Settings
from datasource.main import create_app

PROTECTED = [
    ("get", "/", None),
    ("post", "/search", {}),
    ("post", "/query", {}),
    ("post", "/annotations", {}),
]


def assert_unauthorized(resp):
    assert resp.status_code == 401
    assert resp.text == "Unauthorized"
    assert resp.headers["www-authenticate"] == "Basic"


@pytest.mark.parametrize("method,path,body", PROTECTED)
def test_missing_credentials(client, method, path, body):
    kwargs = {} if body is None else {"json": body}
    assert_unauthorized(getattr(client, method)(path, **kwargs))


@pytest.mark.parametrize("method,path,body", PROTECTED)
def test_wrong_password(client, method, path, body):
    kwargs = {} if body is None else {"json": body}
    assert_unauthorized(getattr(client, method)(path, auth=("grafana", "nope"), **kwargs))


@pytest.mark.parametrize(
    "header",
    ["Bearer grafana", "Basic", "Basic !!!not-base64", "Basic " + base64.b64encode(b"no-colon").decode()],
)
def test_malformed_header(client, header):
    assert_unauthorized(client.get("/", headers={"Authorization": header}))


def test_auth_runs_before_body_validation(client):
    assert_unauthorized(client.post("/query", json={"nonsense": True}))


def test_unconfigured_credentials_reject_everything():
    client = TestClient(create_app(Settings()))
    assert_unauthorized(client.get("/", auth=("", "")))


def test_parse_basic():
    token = base64.b64encode(b"user:pa:ss").decode()
    assert parse_basic(f"Basic {token}") == ("user", "pa:ss")
    assert parse_basic(f"basic {token}") == ("user", "pa:ss")
    assert parse_basic(None) is None


def test_cors_preflight_skips_auth(client):
    resp = client.options(
        "/query",
        headers={"Origin": "http://grafana.local", "Access-Control-Request-Method": "POST"},
    )
    assert resp.status_code == 200
    assert "access-control-allow-origin" in resp.headers
