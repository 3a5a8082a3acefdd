"""Pytest fixtures for contact-journey tests."""

from typing import Any, Optional

import httpx
import pytest

from contact_journey.config import Settings
from contact_journey.models.contact import Contact
from contact_journey.models.credential import Credential

INSTANCE_URL = "https://example.my.salesforce.com"


def _query_response(rows: list[dict[str, Any]]) -> httpx.Response:
    return httpx.Response(200, json={"totalSize": len(rows), "done": True, "records": rows})


def soql_object(soql: str) -> str:
    """SObject name a SOQL query selects from."""
    return soql.split(" FROM ", 1)[1].split()[0]


class FakeSalesforce:
    """
    In-memory stand-in for the Salesforce login and query endpoints.
    Query responses are routed by SObject name; `failures` maps an SObject
    to an HTTP status code or an exception to raise instead.
    """

    def __init__(
        self,
        contact: Optional[dict[str, Any]] = None,
        tasks: Optional[list[dict[str, Any]]] = None,
        events: Optional[list[dict[str, Any]]] = None,
        emails: Optional[list[dict[str, Any]]] = None,
        failures: Optional[dict[str, Any]] = None,
        token_status: int = 200,
        token_body: Optional[dict[str, Any]] = None,
    ):
        self.rows = {
            "Contact": [contact] if contact else [],
            "Task": tasks or [],
            "Event": events or [],
            "EmailMessage": emails or [],
        }
        self.failures = failures or {}
        self.token_status = token_status
        self.token_body = token_body or {
            "access_token": "00Dxx!fake-token",
            "instance_url": INSTANCE_URL,
            "token_type": "Bearer",
        }
        self.requests: list[httpx.Request] = []
        self.queries: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/services/oauth2/token"):
            return httpx.Response(self.token_status, json=self.token_body)

        soql = request.url.params.get("q", "")
        self.queries.append(soql)
        sobject = soql_object(soql)
        failure = self.failures.get(sobject)
        if isinstance(failure, Exception):
            raise failure
        if isinstance(failure, int):
            return httpx.Response(failure, json=[{"errorCode": "INVALID_TYPE", "message": "boom"}])
        return _query_response(self.rows[sobject])

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def settings() -> Settings:
    """Complete settings pointing at a fake login host."""
    return Settings(
        client_id="3MVG9-client-id",
        client_secret="s3cr3t-value",
        username="integration@example.com",
        password="hunter2TOKEN",
        login_url="https://login.example.com",
    )


@pytest.fixture
def credential() -> Credential:
    return Credential(access_token="00Dxx!fake-token", instance_url=INSTANCE_URL, token_type="Bearer")


@pytest.fixture
def contact_row() -> dict[str, Any]:
    """Contact lookup row as returned by the REST query endpoint."""
    return {
        "attributes": {"type": "Contact", "url": "/services/data/v59.0/sobjects/Contact/003xyz"},
        "Id": "003xyz",
        "Name": "Ada Lovelace",
        "Email": "ada@example.com",
        "Account": {"attributes": {"type": "Account"}, "Name": "Analytical Engines"},
    }


@pytest.fixture
def contact(contact_row: dict[str, Any]) -> Contact:
    return Contact.from_salesforce(contact_row)


@pytest.fixture
def task_rows() -> list[dict[str, Any]]:
    return [
        {
            "Id": "00T1",
            "Subject": "Follow up",
            "ActivityDate": "2024-03-05",
            "Description": "Discussed renewal terms and next quarter onboarding for the team.",
            "Type": "Call",
            "Status": "Completed",
            "CallType": "Outbound",
        },
        {
            "Id": "00T2",
            "Subject": "Send proposal",
            "ActivityDate": None,
            "Description": None,
            "Type": None,
            "Status": "Not Started",
            "CallType": None,
        },
    ]


@pytest.fixture
def event_rows() -> list[dict[str, Any]]:
    return [
        {
            "Id": "00U1",
            "Subject": "Kickoff",
            "ActivityDate": "2024-01-10",
            "Description": "On site",
            "Type": "Meeting",
        },
    ]


@pytest.fixture
def email_rows() -> list[dict[str, Any]]:
    return [
        {
            "Id": "02s1",
            "Subject": "Welcome aboard",
            "MessageDate": "2024-02-01T09:30:00.000+0000",
            "TextBody": "Hi Ada, welcome!",
            "Status": "Sent",
        },
    ]


@pytest.fixture
def fake_salesforce(contact_row, task_rows, event_rows, email_rows) -> FakeSalesforce:
    """Fake API with one contact and records in every source."""
    return FakeSalesforce(contact=contact_row, tasks=task_rows, events=event_rows, emails=email_rows)


@pytest.fixture
def opened_clients(monkeypatch, fake_salesforce) -> list[httpx.Client]:
    """
    Routes every httpx.Client built without a transport to the fake API and
    records each client opened during the test.
    """
    opened: list[httpx.Client] = []
    original_init = httpx.Client.__init__

    def init(self, *args, **kwargs):
        kwargs.setdefault("transport", httpx.MockTransport(fake_salesforce.handler))
        original_init(self, *args, **kwargs)
        opened.append(self)

    monkeypatch.setattr(httpx.Client, "__init__", init)
    return opened
