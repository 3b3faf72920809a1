"""Ping route test suite.

Exercise the endpoint over HTTP with the FastAPI test client.
"""
import warnings

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from pingprobe.api.routes import to_response
from pingprobe.config import Settings
from pingprobe.core.exceptions import DependencyUnavailable
from pingprobe.core.types import ResponseSpec, Severity


def will_throw(exc: BaseException):
    def check() -> None:
        raise exc
    return check


PING_HEADERS = {
    "cache-control": "must-revalidate, no-store",
    "content-type": "text/plain; charset=utf-8",
    "expires": "0",
}


def assert_uncacheable_plain_text(response) -> None:
    """Exactly the ping headers; content-length is added by the transport."""
    headers = {key: value for key, value in response.headers.items() if key != "content-length"}
    assert headers == PING_HEADERS


def test_ping_returns_pong(client: TestClient):
    response = client.get("/ping")

    assert response.status_code == status.HTTP_200_OK
    assert response.text == "pong"
    assert_uncacheable_plain_text(response)


def test_head_ping(client: TestClient):
    response = client.head("/ping")

    assert response.status_code == status.HTTP_200_OK
    assert_uncacheable_plain_text(response)


def test_ping_rejects_post(client: TestClient):
    assert client.post("/ping").status_code == status.HTTP_405_METHOD_NOT_ALLOWED


def test_ping_is_not_in_openapi_schema(client: TestClient):
    assert "/ping" not in client.get("/openapi.json").json()["paths"]


@pytest.mark.parametrize("exc, status_code, body, severity", [
    (DependencyUnavailable("redis down"), 503, "Service Unavailable", Severity.CRITICAL),
    (ValueError("bad config"), 500, "Internal Server Error", Severity.ERROR),
    (AssertionError("invariant"), 500, "Internal Server Error", Severity.CRITICAL),
])
def test_failing_check(make_client, logger, exc, status_code, body, severity):
    client = make_client(check=will_throw(exc), logger=logger)

    response = client.get("/ping")

    assert response.status_code == status_code
    assert response.text == body
    assert_uncacheable_plain_text(response)
    [(logged_severity, message, context)] = logger.clean_logs()
    assert (logged_severity, message) == (severity, "Ping failed")
    assert context["fault"].exception is exc


def test_deprecations_over_http(make_client, logger):
    def check() -> None:
        warnings.warn("foo", DeprecationWarning)
        warnings.warn("bar", DeprecationWarning)

    response = make_client(check=check, logger=logger).get("/ping")

    assert response.status_code == status.HTTP_200_OK
    assert response.text == "pong"
    assert logger.clean_logs() == [
        (Severity.NOTICE, "foo", {}),
        (Severity.NOTICE, "bar", {}),
    ]


def test_warning_over_http(make_client, logger):
    response = make_client(check=lambda: warnings.warn("Problem", UserWarning), logger=logger).get("/ping")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.text == "Internal Server Error"
    assert logger.clean_logs()[0][:2] == (Severity.ERROR, "Ping failed")


def test_repeated_pings_are_identical(client: TestClient):
    first, second = client.get("/ping"), client.get("/ping")

    assert first.content == second.content
    assert first.status_code == second.status_code
    assert first.headers["Cache-Control"] == second.headers["Cache-Control"]


def test_custom_path(make_client):
    settings = Settings(PING_PATH="/healthz", _env_file=None)
    client = make_client(settings=settings)

    assert client.get("/healthz").text == "pong"
    assert client.get("/ping").status_code == status.HTTP_404_NOT_FOUND


def test_http10_only_expires_over_http11(make_client):
    settings = Settings(PING_EXPIRES_HTTP10_ONLY=True, _env_file=None)
    response = make_client(settings=settings).get("/ping")

    assert response.status_code == status.HTTP_200_OK
    assert "Expires" not in response.headers


def test_exact_headers_with_correlation_id(client: TestClient):
    response = client.get("/ping", headers={"X-Request-ID": "trace-abc-123"})

    assert_uncacheable_plain_text(response)


def test_exact_headers_on_failure(make_client):
    response = make_client(check=will_throw(DependencyUnavailable("down"))).get("/ping")

    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert_uncacheable_plain_text(response)


class TestToResponse:

    def test_passes_expires_through_when_required(self) -> None:
        spec = ResponseSpec(
            status_code=200,
            body="pong",
            headers={"Cache-Control": "must-revalidate, no-store", "Expires": "0"},
            requires_expires_override=True,
        )

        response = to_response(spec)

        assert response.headers["expires"] == "0"
        assert response.body == b"pong"

    def test_drops_expires_when_not_required(self) -> None:
        spec = ResponseSpec(
            status_code=200,
            body="pong",
            headers={"Cache-Control": "must-revalidate, no-store", "Expires": "0"},
        )

        response = to_response(spec)

        assert "expires" not in response.headers
        assert response.headers["cache-control"] == "must-revalidate, no-store"
