"""Event source: calendar meetings and scheduled calls."""

from typing import Optional

from contact_journey.models.activity import EventRecord
from contact_journey.models.contact import Contact
from contact_journey.models.raw import RawRecord
from contact_journey.salesforce.soql import escape_literal
from contact_journey.sources.base import ActivitySource


class EventSource(ActivitySource):
    """Events whose WhoId is the contact."""

    source_id = "event"

    FIELDS = ("Id", "Subject", "ActivityDate", "Description", "Type")

    def build_query(self, contact: Contact) -> Optional[str]:
        return (
            f"SELECT {', '.join(self.FIELDS)} FROM Event "
            f"WHERE WhoId = '{escape_literal(contact.id)}' "
            "ORDER BY ActivityDate ASC NULLS LAST"
        )

    def normalize(self, raw: RawRecord) -> EventRecord:
        return EventRecord.model_validate(raw.data)
