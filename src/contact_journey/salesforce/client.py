"""Authenticated SOQL query client for the Salesforce REST API."""

import logging
from typing import Any, Optional

import httpx

from contact_journey.models.credential import Credential

logger = logging.getLogger(__name__)


class SalesforceClient:
    """
    Runs SOQL queries with one credential. Thin over httpx: non-2xx responses
    raise httpx.HTTPStatusError, transport problems raise httpx.RequestError.
    """

    QUERY_PATH_TEMPLATE = "/services/data/{version}/query/"

    def __init__(
        self,
        credential: Credential,
        *,
        api_version: str = "v59.0",
        client: Optional[httpx.Client] = None,
        timeout: float = 30.0,
    ):
        self.credential = credential
        self.api_version = api_version
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "SalesforceClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def query_url(self) -> str:
        return self.credential.base_url.rstrip("/") + self.QUERY_PATH_TEMPLATE.format(
            version=self.api_version
        )

    def query(self, soql: str) -> dict[str, Any]:
        """Run one query and return the decoded response (totalSize, done, records)."""
        resp = self._client.get(
            self.query_url,
            params={"q": soql},
            headers={
                "Authorization": self.credential.authorization,
                "Content-Type": "application/json",
            },
        )
        resp.raise_for_status()
        payload = resp.json()
        if not isinstance(payload, dict):
            raise ValueError(f"Unexpected query response type: {type(payload).__name__}")
        logger.debug("Query returned %s rows: %s", payload.get("totalSize"), soql.split(" WHERE ")[0])
        return payload

    def records(self, soql: str) -> list[dict[str, Any]]:
        """Run a query and return just its rows."""
        return list(self.query(soql).get("records") or [])
