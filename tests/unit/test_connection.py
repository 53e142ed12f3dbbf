# tests/unit/test_connection.py
"""Tests for OrgConnection and HTTP error mapping."""

from __future__ import annotations

import json

import httpx
import pytest

from metadata_enrichment.config.schema import ConnectionConfig
from metadata_enrichment.connection.client import Connection, OrgConnection
from metadata_enrichment.core.exceptions import ConnectionConfigError
from metadata_enrichment.core.http import (
    APIError,
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    create_api_client,
)
from tests.conftest import FakeConnection, make_response

CONFIG = ConnectionConfig(instance_url="https://org.example.com", access_token="secret")


def _connection(handler) -> OrgConnection:
    return OrgConnection(CONFIG, transport=httpx.MockTransport(handler))


class TestConstruction:
    def test_requires_instance_url(self):
        with pytest.raises(ConnectionConfigError, match="instance_url"):
            OrgConnection(ConnectionConfig(access_token="t"))

    def test_requires_access_token(self):
        with pytest.raises(ConnectionConfigError, match="access_token"):
            OrgConnection(ConnectionConfig(instance_url="https://org.example.com"))

    def test_satisfies_protocol(self):
        with _connection(lambda request: httpx.Response(200, json={})) as connection:
            assert isinstance(connection, Connection)
        assert isinstance(FakeConnection(), Connection)

    def test_timeout_comes_from_config(self):
        config = ConnectionConfig(
            instance_url="https://org.example.com", access_token="secret", timeout=45
        )
        transport = httpx.MockTransport(lambda request: httpx.Response(204))
        with OrgConnection(config, transport=transport) as connection:
            assert connection.client.timeout == httpx.Timeout(45.0)


class TestCreateApiClient:
    def test_bearer_and_json_headers(self):
        with create_api_client("https://org.example.com", "tok", timeout=10) as client:
            assert client.headers["Authorization"] == "Bearer tok"
            assert client.headers["Content-Type"] == "application/json"
            assert client.headers["Accept"] == "application/json"
            assert client.timeout == httpx.Timeout(10)

    def test_no_token_no_auth_header(self):
        with create_api_client("https://org.example.com", None, timeout=10) as client:
            assert "Authorization" not in client.headers


class TestRequestPost:
    def test_sends_json_with_auth_and_headers(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["encoding"] = request.headers["X-Chatter-Entity-Encoding"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=make_response("hello"))

        with _connection(handler) as connection:
            data = connection.request_post(
                "/services/data/x", {"maxTokens": 50}, headers={"X-Chatter-Entity-Encoding": "false"}
            )

        assert seen["url"] == "https://org.example.com/services/data/x"
        assert seen["auth"] == "Bearer secret"
        assert seen["encoding"] == "false"
        assert seen["body"] == {"maxTokens": 50}
        assert data["results"][0]["resourceName"] == "hello"

    def test_empty_body_returns_none(self):
        with _connection(lambda request: httpx.Response(204)) as connection:
            assert connection.request_post("/p", {}) is None

    @pytest.mark.parametrize(
        "status, error_type",
        [
            (401, AuthenticationError),
            (429, RateLimitError),
            (404, NotFoundError),
            (500, APIError),
        ],
    )
    def test_status_errors_are_mapped(self, status, error_type):
        body = [{"message": "Session expired or invalid", "errorCode": "INVALID_SESSION_ID"}]

        with _connection(lambda request: httpx.Response(status, json=body)) as connection:
            with pytest.raises(error_type) as exc_info:
                connection.request_post("/p", {})

        error = exc_info.value
        assert error.status_code == status
        assert error.provider == "org"
        assert error.endpoint == "/p"
        assert error.details == "Session expired or invalid"
        assert f"(HTTP {status})" in str(error)

    def test_connect_error_is_mapped(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with _connection(handler) as connection:
            with pytest.raises(APIError, match="Failed to connect to org"):
                connection.request_post("/p", {})

    def test_timeout_is_mapped(self):
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        with _connection(handler) as connection:
            with pytest.raises(APIError, match="timed out"):
                connection.request_post("/p", {})

    def test_invalid_json_is_an_error(self):
        with _connection(lambda request: httpx.Response(200, content=b"<html>")) as connection:
            with pytest.raises(APIError):
                connection.request_post("/p", {})
