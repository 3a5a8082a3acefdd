"""Task source: calls and to-dos logged against the contact."""

from typing import Optional

from contact_journey.models.activity import TaskRecord
from contact_journey.models.contact import Contact
from contact_journey.models.raw import RawRecord
from contact_journey.salesforce.soql import escape_literal
from contact_journey.sources.base import ActivitySource


class TaskSource(ActivitySource):
    """Tasks whose WhoId is the contact."""

    source_id = "task"

    FIELDS = ("Id", "Subject", "ActivityDate", "Description", "Type", "Status", "CallType")

    def build_query(self, contact: Contact) -> Optional[str]:
        return (
            f"SELECT {', '.join(self.FIELDS)} FROM Task "
            f"WHERE WhoId = '{escape_literal(contact.id)}' "
            "ORDER BY ActivityDate ASC NULLS LAST"
        )

    def normalize(self, raw: RawRecord) -> TaskRecord:
        return TaskRecord.model_validate(raw.data)
