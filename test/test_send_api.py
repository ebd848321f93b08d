"""
HTTP tests for POST /send.
"""

import logging

import pytest
from fastapi.testclient import TestClient

from conftest import RecordingProvider
from mailer.config import Settings
from mailer.main import create_app
from mailer.providers.interface import ProviderName
from mailer.providers.mock import MockProvider

BAD_REQUEST = {"code": 400, "message": "Bad Request"}


def test_single_recipient(client: TestClient) -> None:
    resp = client.post(
        "/send",
        json={
            "to": "foo@example.com",
            "cc": [],
            "subject": "bar",
            "body": {"text": "baz", "html": "<a>qux</a>"},
            "provider": "mock",
        },
    )

    assert resp.status_code == 200
    assert resp.json() == {"messageId": "mock:deadbeef"}


def test_multiple_recipients(client: TestClient) -> None:
    resp = client.post(
        "/send",
        json={
            "to": "foo@example.com",
            "cc": ["bar@example.com", "baz@example.com"],
            "subject": "wibble",
            "body": {"text": "blee", "html": ""},
            "provider": "mock",
        },
    )

    assert resp.status_code == 200
    assert resp.json() == {"messageId": "mock:deadbeef"}


def test_without_optional_data(client: TestClient) -> None:
    resp = client.post(
        "/send",
        json={"to": "foo@example.com", "subject": "bar", "body": {"text": "baz"}, "provider": "mock"},
    )

    assert resp.status_code == 200
    assert resp.json() == {"messageId": "mock:deadbeef"}


def test_default_provider_when_omitted(client: TestClient) -> None:
    resp = client.post(
        "/send",
        json={"to": "foo@example.com", "subject": "bar", "body": {"text": "baz"}},
    )

    assert resp.status_code == 200
    assert resp.json() == {"messageId": "mock:deadbeef"}


def test_repeated_mock_requests_return_same_id(client: TestClient) -> None:
    payload = {"to": "foo@example.com", "subject": "bar", "body": {"text": "baz"}, "provider": "mock"}

    ids = {client.post("/send", json=payload).json()["messageId"] for _ in range(3)}

    assert ids == {"mock:deadbeef"}


def test_missing_to_field(client: TestClient) -> None:
    resp = client.post("/send", json={"subject": "bar", "body": {"text": "baz"}, "provider": "mock"})

    assert resp.status_code == 400
    assert resp.json() == BAD_REQUEST


def test_missing_subject_field(client: TestClient) -> None:
    resp = client.post(
        "/send", json={"to": ["foo@example.com"], "body": {"text": "baz"}, "provider": "mock"}
    )

    assert resp.status_code == 400
    assert resp.json() == BAD_REQUEST


def test_missing_body_text_field(client: TestClient) -> None:
    resp = client.post(
        "/send",
        json={"to": "foo@example.com", "subject": "bar", "body": {"html": "<a>qux</a>"}, "provider": "mock"},
    )

    assert resp.status_code == 400
    assert resp.json() == BAD_REQUEST


def test_empty_subject(client: TestClient) -> None:
    resp = client.post(
        "/send",
        json={"to": "foo@example.com", "subject": "", "body": {"text": "baz"}, "provider": "mock"},
    )

    assert resp.status_code == 400


def test_empty_body_text(client: TestClient) -> None:
    resp = client.post(
        "/send",
        json={"to": "foo@example.com", "subject": "bar", "body": {"text": ""}, "provider": "mock"},
    )

    assert resp.status_code == 400
    assert resp.json() == BAD_REQUEST


def test_invalid_to_field(client: TestClient) -> None:
    for to in (["foo"], "foo", "<foo@example.com>", "foo@example.com "):
        resp = client.post(
            "/send",
            json={"to": to, "subject": "bar", "body": {"text": "baz"}, "provider": "mock"},
        )

        assert resp.status_code == 400, to
        assert resp.json() == BAD_REQUEST


def test_invalid_cc_field(client: TestClient) -> None:
    resp = client.post(
        "/send",
        json={
            "to": "foo@example.com",
            "cc": ["bar"],
            "subject": "baz",
            "body": {"text": "qux"},
            "provider": "mock",
        },
    )

    assert resp.status_code == 400
    assert resp.json() == BAD_REQUEST


def test_invalid_provider(client: TestClient) -> None:
    resp = client.post(
        "/send",
        json={"to": "foo@example.com", "subject": "bar", "body": {"text": "baz"}, "provider": "smtps"},
    )

    assert resp.status_code == 400
    assert resp.json() == BAD_REQUEST


def test_malformed_json(client: TestClient) -> None:
    resp = client.post(
        "/send",
        content=b'{"to": "foo@example.com",',
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 400
    assert resp.json() == BAD_REQUEST


def test_invalid_request_does_not_call_provider(settings: Settings) -> None:
    ses = RecordingProvider(ProviderName.SES)
    app = create_app(settings, providers={"mock": MockProvider(), "ses": ses})

    with TestClient(app) as client:
        resp = client.post(
            "/send",
            json={"to": "foo", "subject": "bar", "body": {"text": "baz"}, "provider": "ses"},
        )

    assert resp.status_code == 400
    assert ses.calls == []


def test_unconfigured_provider_is_bad_request(settings: Settings) -> None:
    app = create_app(settings, providers={"mock": MockProvider()})

    with TestClient(app) as client:
        resp = client.post(
            "/send",
            json={"to": "foo@example.com", "subject": "bar", "body": {"text": "baz"}, "provider": "smtp"},
        )

    assert resp.status_code == 400
    assert resp.json() == BAD_REQUEST


def test_provider_failure_is_server_error(settings: Settings) -> None:
    ses = RecordingProvider(ProviderName.SES, fail_with="MessageRejected: Email address is not verified.")
    app = create_app(settings, providers={"ses": ses})

    with TestClient(app) as client:
        resp = client.post(
            "/send",
            json={"to": "foo@example.com", "subject": "bar", "body": {"text": "baz"}, "provider": "ses"},
        )

    assert resp.status_code == 500
    assert resp.json() == {"code": 500, "message": "MessageRejected: Email address is not verified."}


def test_smtp_header_injection_is_provider_error(client: TestClient) -> None:
    resp = client.post(
        "/send",
        json={
            "to": "foo@example.com",
            "subject": "hi\nBcc: x@example.com",
            "body": {"text": "baz"},
            "provider": "smtp",
        },
    )

    assert resp.status_code == 500
    assert resp.json()["code"] == 500
    assert resp.json()["message"].startswith("SMTP error:")


def test_unknown_route(client: TestClient) -> None:
    resp = client.post("/nope", json={})

    assert resp.status_code == 404
    assert resp.json() == {"code": 404, "message": "Not Found"}


def test_wrong_method(client: TestClient) -> None:
    resp = client.get("/send")

    assert resp.status_code == 405
    assert resp.json() == {"code": 405, "message": "Method Not Allowed"}


def test_health_and_request_id(client: TestClient) -> None:
    resp = client.get("/health", headers={"X-Request-ID": "req-123"})

    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}
    assert resp.headers["X-Request-ID"] == "req-123"


@pytest.mark.parametrize(
    "providers,payload,status_code,code",
    [
        (
            {"mock": MockProvider()},
            {"to": "foo", "subject": "bar", "body": {"text": "baz"}, "provider": "mock"},
            400,
            "VALIDATION_ERROR",
        ),
        (
            {"ses": RecordingProvider(ProviderName.SES, fail_with="Throttling")},
            {"to": "foo@example.com", "subject": "bar", "body": {"text": "baz"}, "provider": "ses"},
            500,
            "PROVIDER_ERROR",
        ),
    ],
)
def test_error_code_is_logged(
    settings: Settings,
    caplog: pytest.LogCaptureFixture,
    providers: dict,
    payload: dict,
    status_code: int,
    code: str,
) -> None:
    # No lifespan: keep pytest's capture handler on the root logger
    client = TestClient(create_app(settings, providers=providers))

    with caplog.at_level(logging.INFO, logger="mailer.shared.errors"):
        resp = client.post("/send", json=payload)

    assert resp.status_code == status_code
    records = [r for r in caplog.records if r.name == "mailer.shared.errors"]
    assert records
    assert records[-1].code == code
