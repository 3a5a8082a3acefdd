"""Abstract base class for activity sources."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import pydantic

from contact_journey.config import Settings
from contact_journey.models.activity import ActivityRecord
from contact_journey.models.contact import Contact
from contact_journey.models.raw import RawRecord
from contact_journey.salesforce.client import SalesforceClient

logger = logging.getLogger(__name__)


class ActivitySource(ABC):
    """
    One SOQL source of activity records for a contact.
    Sources build their query, run it, and normalize rows into typed records.
    """

    source_id: str = ""

    @classmethod
    def from_settings(cls, settings: Settings) -> "ActivitySource":
        """Instance configured from settings. Sources without options ignore them."""
        return cls()

    @abstractmethod
    def build_query(self, contact: Contact) -> Optional[str]:
        """
        SOQL for this contact, or None when the source has nothing to ask for.
        """
        pass

    @abstractmethod
    def normalize(self, raw: RawRecord) -> ActivityRecord:
        """
        Convert a raw row into a typed activity record.
        """
        pass

    def search(self, client: SalesforceClient, contact: Contact) -> list[RawRecord]:
        """Run the query and wrap each row. Transport and HTTP errors propagate."""
        soql = self.build_query(contact)
        if soql is None:
            logger.info("Source %s has no query for contact %s; skipping", self.source_id, contact.id)
            return []
        return [RawRecord(source_id=self.source_id, data=row) for row in client.records(soql)]

    def fetch_all(self, client: SalesforceClient, contact: Contact) -> list[ActivityRecord]:
        """
        Search then normalize each row. Rows that fail validation are dropped
        with a warning; the rest of the source is kept.
        """
        records: list[ActivityRecord] = []
        for raw in self.search(client, contact):
            try:
                records.append(self.normalize(raw))
            except pydantic.ValidationError as e:
                logger.warning(
                    "Dropping malformed %s row %s: %s",
                    self.source_id,
                    raw.data.get("Id"),
                    e.errors(include_url=False),
                )
        return records
