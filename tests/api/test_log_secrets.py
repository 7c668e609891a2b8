"""Assert that passwords, hashes, and tokens never appear in log output."""

from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient

from msusers.api import dependencies
from tests.conftest import make_user_payload

TEST_EMAIL = "secrets-test@example.com"
TEST_PASSWORD = "super-s3cret-p@ssw0rd!"


def _register(client: TestClient) -> None:
    client.post(
        "/v1/users", json=make_user_payload(email=TEST_EMAIL, password=TEST_PASSWORD)
    )


def test_create_user_does_not_log_password_or_hash(
    client: TestClient, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.DEBUG):
        _register(client)

    stored = dependencies.user_repo.find_by_email(TEST_EMAIL)
    assert stored is not None
    all_log_text = " ".join(caplog.messages)
    assert TEST_PASSWORD not in all_log_text, "Password found in log output!"
    assert stored.password_hash not in all_log_text, "Hash found in log output!"


def test_rejected_create_does_not_log_password(
    client: TestClient, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.DEBUG):
        client.post(
            "/v1/users",
            json=make_user_payload(firstName="Al", password=TEST_PASSWORD),
        )

    assert TEST_PASSWORD not in " ".join(caplog.messages)


def test_failed_login_does_not_log_password(
    client: TestClient, caplog: pytest.LogCaptureFixture
) -> None:
    _register(client)
    with caplog.at_level(logging.DEBUG):
        client.post("/v1/login", json={"email": TEST_EMAIL, "password": TEST_PASSWORD + "x"})

    assert TEST_PASSWORD not in " ".join(caplog.messages)


def test_successful_login_does_not_log_token(
    client: TestClient, caplog: pytest.LogCaptureFixture
) -> None:
    _register(client)
    with caplog.at_level(logging.DEBUG):
        resp = client.post(
            "/v1/login", json={"email": TEST_EMAIL, "password": TEST_PASSWORD}
        )
        client.get(
            "/v1/users/1", headers={"Authorization": f"Bearer {resp.json()['token']}"}
        )

    all_log_text = " ".join(caplog.messages)
    assert TEST_PASSWORD not in all_log_text
    assert resp.json()["token"] not in all_log_text, "Token found in log output!"
