"""Tests for the HTTP function entrypoints."""

import json
from unittest.mock import patch

import pytest
from flask import Flask, request

from conftest import FakeSalesforce
from contact_journey.api import contact_journey, handle_auth, handle_journey, salesforce_auth
from contact_journey.config import Settings
from contact_journey.fetcher import RecordFetcher
from contact_journey.salesforce.auth import CredentialProvider

ALL_MISSING = (
    "Missing Salesforce environment variables: "
    "SF_CLIENT_ID, SF_CLIENT_SECRET, SF_USERNAME, SF_PASSWORD"
)


@pytest.fixture
def app() -> Flask:
    return Flask("contact-journey-tests")


@pytest.fixture
def clear_sf_env(monkeypatch) -> None:
    for key in ("SF_CLIENT_ID", "SF_CLIENT_SECRET", "SF_USERNAME", "SF_PASSWORD"):
        monkeypatch.delenv(key, raising=False)


def _wired(fake: FakeSalesforce, settings: Settings) -> dict:
    return {
        "settings": settings,
        "provider": CredentialProvider(settings, client=fake.client()),
        "fetcher": RecordFetcher(settings, client=fake.client()),
    }


class TestPreflight:
    """OPTIONS requests answer 200 with an empty body and CORS headers."""

    @pytest.mark.parametrize("handler", [handle_auth, handle_journey])
    def test_options(self, app, handler) -> None:
        with app.test_request_context("/", method="OPTIONS"):
            body, status, headers = handler(request)
        assert body == ""
        assert status == 200
        assert headers["Access-Control-Allow-Origin"] == "*"
        assert headers["Access-Control-Allow-Methods"] == "GET, POST, OPTIONS"


class TestAuthEndpoint:
    """Tests for handle_auth."""

    def test_success(self, app, settings) -> None:
        provider = CredentialProvider(settings, client=FakeSalesforce().client())
        with app.test_request_context("/", method="POST"):
            body, status, headers = handle_auth(request, provider=provider)
        payload = json.loads(body)
        assert status == 200
        assert headers["Content-Type"] == "application/json"
        assert payload == {
            "success": True,
            "access_token": "00Dxx!fake-token",
            "instance_url": "https://example.my.salesforce.com",
            "token_type": "Bearer",
        }

    def test_rejected_still_200(self, app, settings) -> None:
        fake = FakeSalesforce(token_status=400, token_body={"error": "invalid_client_id"})
        provider = CredentialProvider(settings, client=fake.client())
        with app.test_request_context("/", method="POST"):
            body, status, _ = handle_auth(request, provider=provider)
        payload = json.loads(body)
        assert status == 200
        assert payload["success"] is False
        assert "Invalid Client ID" in payload["error"]
        assert payload["timestamp"].endswith("Z")

    def test_missing_config_from_environment(self, app, clear_sf_env) -> None:
        with app.test_request_context("/", method="POST"):
            body, status, _ = salesforce_auth(request)
        payload = json.loads(body)
        assert status == 200
        assert payload["success"] is False
        assert payload["error"] == ALL_MISSING

    def test_unexpected_error_still_200(self, app, settings) -> None:
        with patch.object(CredentialProvider, "acquire", side_effect=RuntimeError("kaboom")):
            with app.test_request_context("/", method="POST"):
                body, status, _ = handle_auth(request, settings=settings)
        assert status == 200
        assert json.loads(body)["error"] == "kaboom"

    def test_closes_provider_client(self, app, settings, opened_clients) -> None:
        with app.test_request_context("/", method="POST"):
            body, status, _ = handle_auth(request, settings=settings)
        assert json.loads(body)["success"] is True
        assert len(opened_clients) == 1
        assert opened_clients[0].is_closed


class TestJourneyEndpoint:
    """Tests for handle_journey."""

    def test_success(self, app, fake_salesforce, settings) -> None:
        with app.test_request_context("/", method="POST", json={"contactId": "003xyz"}):
            body, status, _ = handle_journey(request, **_wired(fake_salesforce, settings))
        payload = json.loads(body)
        assert status == 200
        assert payload["success"] is True
        journey = payload["journey"]
        assert journey["journeyTitle"] == "Ada Lovelace's Journey"
        assert set(journey["theme"]) >= {"groundColor", "gridColor", "skyTopColor", "skyBottomColor"}
        events = journey["events"]
        assert len(events) == 6
        assert events[0] == {"type": "start", "position": [-10, 0, 0], "description": "The journey begins."}
        assert events[-1]["type"] == "end"
        call = events[4]
        assert call["type"] == "PHONE_CALL"
        assert call["sentiment"] == "happy"
        assert call["eventDuration"] == 2.5
        assert call["data"]["Date"] == "3/5/2024"

    @pytest.mark.parametrize("json_body", [{}, {"contactId": ""}, {"contactId": None}, ["003xyz"]])
    def test_missing_contact_id(self, app, settings, json_body) -> None:
        fake = FakeSalesforce()
        with app.test_request_context("/", method="POST", json=json_body):
            body, status, _ = handle_journey(request, **_wired(fake, settings))
        assert status == 500
        assert json.loads(body) == {"success": False, "error": "Contact ID is required"}
        assert fake.requests == []

    def test_non_json_body(self, app, settings) -> None:
        with app.test_request_context("/", method="POST", data="contactId=003xyz"):
            body, status, _ = handle_journey(request, **_wired(FakeSalesforce(), settings))
        assert status == 500
        assert json.loads(body)["error"] == "Contact ID is required"

    def test_contact_not_found(self, app, settings) -> None:
        with app.test_request_context("/", method="POST", json={"contactId": "003nobody"}):
            body, status, _ = handle_journey(request, **_wired(FakeSalesforce(), settings))
        assert status == 500
        assert json.loads(body) == {"success": False, "error": "Contact not found"}

    def test_missing_config(self, app, clear_sf_env) -> None:
        with app.test_request_context("/", method="POST", json={"contactId": "003xyz"}):
            body, status, _ = contact_journey(request)
        assert status == 500
        assert json.loads(body) == {"success": False, "error": ALL_MISSING}

    def test_auth_failure(self, app, settings) -> None:
        fake = FakeSalesforce(token_status=400, token_body={"error": "invalid_grant"})
        with app.test_request_context("/", method="POST", json={"contactId": "003xyz"}):
            body, status, _ = handle_journey(request, **_wired(fake, settings))
        payload = json.loads(body)
        assert status == 500
        assert payload["success"] is False
        assert payload["error"].startswith("Salesforce authentication failed: Invalid username")

    def test_unexpected_error_is_500(self, app, settings) -> None:
        with patch("contact_journey.api.handlers.build_journey", side_effect=KeyError("boom")):
            with app.test_request_context("/", method="POST", json={"contactId": "003xyz"}):
                body, status, _ = handle_journey(request, settings=settings)
        assert status == 500
        assert json.loads(body)["success"] is False
