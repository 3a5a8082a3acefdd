"""EmailMessage source: inbound mail addressed to the contact."""

from typing import Optional

from contact_journey.config import Settings
from contact_journey.models.activity import EmailMessageRecord
from contact_journey.models.contact import Contact
from contact_journey.models.raw import RawRecord
from contact_journey.salesforce.soql import escape_like
from contact_journey.sources.base import ActivitySource


class EmailMessageSource(ActivitySource):
    """
    Email messages whose ToAddress contains the contact's email.
    Capped at `limit` rows, oldest first.
    """

    source_id = "email_message"

    FIELDS = ("Id", "Subject", "MessageDate", "TextBody", "Status")
    DEFAULT_LIMIT = 20

    def __init__(self, limit: int = DEFAULT_LIMIT):
        self.limit = limit

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailMessageSource":
        return cls(limit=settings.email_limit)

    def build_query(self, contact: Contact) -> Optional[str]:
        if not contact.email:
            return None
        return (
            f"SELECT {', '.join(self.FIELDS)} FROM EmailMessage "
            f"WHERE ToAddress LIKE '%{escape_like(contact.email)}%' "
            f"ORDER BY MessageDate ASC NULLS LAST LIMIT {int(self.limit)}"
        )

    def normalize(self, raw: RawRecord) -> EmailMessageRecord:
        return EmailMessageRecord.model_validate(raw.data)
