"""Contact lookup and concurrent activity fan-out across sources."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional

import httpx

from contact_journey.config import Settings
from contact_journey.errors import NotFoundError, PartialFetchWarning, UpstreamError, ValidationError
from contact_journey.models.activity import ActivityRecord
from contact_journey.models.contact import Contact
from contact_journey.models.credential import Credential
from contact_journey.salesforce.client import SalesforceClient
from contact_journey.salesforce.soql import sanitize_record_id
from contact_journey.sources.base import ActivitySource
from contact_journey.sources.registry import SourceRegistry

logger = logging.getLogger(__name__)


@dataclass
class SourceOutcome:
    """Result-or-failure of one source query."""

    source_id: str
    records: list[ActivityRecord] = field(default_factory=list)
    error: Optional[PartialFetchWarning] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class FetchResult:
    """Everything fetched for one contact."""

    contact: Contact
    outcomes: list[SourceOutcome] = field(default_factory=list)

    @property
    def records(self) -> list[ActivityRecord]:
        """Records of succeeding sources, concatenated in source order."""
        return [r for o in self.outcomes if o.ok for r in o.records]

    @property
    def failed_sources(self) -> list[str]:
        return [o.source_id for o in self.outcomes if not o.ok]


class RecordFetcher:
    """
    Resolves the contact, then runs every source concurrently.
    A failing source never aborts the fetch; its outcome carries the failure.
    """

    CONTACT_QUERY = "SELECT Id, Name, Email, Account.Name FROM Contact WHERE Id = '{contact_id}'"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        sources: Optional[list[ActivitySource]] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.settings = settings or Settings()
        self.sources = sources if sources is not None else SourceRegistry.default_sources(self.settings)
        self._http = client

    def client_for(self, credential: Credential) -> SalesforceClient:
        return SalesforceClient(
            credential,
            api_version=self.settings.api_version,
            client=self._http,
            timeout=self.settings.timeout,
        )

    def resolve_contact(self, client: SalesforceClient, contact_id: str) -> Contact:
        """Look up the contact by sanitized id."""
        clean_id = sanitize_record_id(contact_id)
        if not clean_id:
            raise ValidationError("Contact ID is required")

        try:
            payload = client.query(self.CONTACT_QUERY.format(contact_id=clean_id))
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamError(f"Contact lookup failed: {e}") from e

        rows = payload.get("records") or []
        if not payload.get("totalSize") or not rows:
            raise NotFoundError("Contact not found")
        return Contact.from_salesforce(rows[0])

    def _run_source(
        self, source: ActivitySource, client: SalesforceClient, contact: Contact
    ) -> SourceOutcome:
        try:
            records = source.fetch_all(client, contact)
        except (httpx.HTTPError, ValueError) as e:
            warning = PartialFetchWarning(source.source_id, e)
            logger.warning("Query failed (continuing): %s", warning)
            return SourceOutcome(source_id=source.source_id, error=warning)
        except Exception as e:
            warning = PartialFetchWarning(source.source_id, e)
            logger.exception("Unexpected source failure (continuing): %s", warning)
            return SourceOutcome(source_id=source.source_id, error=warning)
        return SourceOutcome(source_id=source.source_id, records=records)

    def fetch_activities(self, client: SalesforceClient, contact: Contact) -> list[SourceOutcome]:
        """Run all sources concurrently; outcomes come back in source order."""
        if not self.sources:
            return []
        with ThreadPoolExecutor(max_workers=len(self.sources)) as executor:
            futures = [
                executor.submit(self._run_source, source, client, contact)
                for source in self.sources
            ]
            return [f.result() for f in futures]

    def fetch(self, credential: Credential, contact_id: str) -> FetchResult:
        """Resolve the contact and collect activities from every source."""
        with self.client_for(credential) as client:
            contact = self.resolve_contact(client, contact_id)
            logger.info("Building journey for contact: %s", contact.id)
            outcomes = self.fetch_activities(client, contact)
        result = FetchResult(contact=contact, outcomes=outcomes)
        if result.failed_sources:
            logger.warning(
                "Skipped %d of %d sources for %s: %s",
                len(result.failed_sources),
                len(outcomes),
                contact.id,
                ", ".join(result.failed_sources),
            )
        return result
