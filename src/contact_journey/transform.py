"""Activity records → positioned journey events."""

import logging
from collections.abc import Sequence
from datetime import timezone
from typing import Optional

from contact_journey.assembler import assemble
from contact_journey.models.activity import ActivityRecord, parse_salesforce_datetime
from contact_journey.models.contact import Contact
from contact_journey.models.journey import EventCategory, Journey, JourneyEvent, Sentiment

logger = logging.getLogger(__name__)

CATEGORY_BY_TYPE = {
    "Call": EventCategory.PHONE_CALL,
    "Email": EventCategory.EMAIL,
    "Meeting": EventCategory.MEETING,
    "Task": EventCategory.SUPPORT,
    "EmailMessage": EventCategory.EMAIL,
}

SENTIMENT_BY_STATUS = {
    "Completed": Sentiment.HAPPY,
    "Closed": Sentiment.CONTENT,
    "In Progress": Sentiment.CURIOUS,
    "Not Started": Sentiment.NEUTRAL,
    "Deferred": Sentiment.CONCERNED,
    "Sent": Sentiment.CONTENT,
    "Delivered": Sentiment.HAPPY,
}

START_DESCRIPTION = "The journey begins."
END_DESCRIPTION = "The journey continues..."

BODY_PREVIEW_CHARS = 50


def classify(record: ActivityRecord) -> EventCategory:
    """Category from the type label; unlabeled mail is EMAIL, anything else SUPPORT."""
    label = record.type_label
    if label:
        return CATEGORY_BY_TYPE.get(label, EventCategory.SUPPORT)
    if record.has_message_timestamp:
        return EventCategory.EMAIL
    return EventCategory.SUPPORT


def sentiment_for(record: ActivityRecord) -> Sentiment:
    return SENTIMENT_BY_STATUS.get(record.status or "", Sentiment.NEUTRAL)


def describe(record: ActivityRecord) -> str:
    """Subject (or '<type> activity'), plus the first 50 chars of the body if any."""
    text = record.subject or f"{record.type_label or 'Email'} activity"
    if record.body:
        text += f" - {record.body[:BODY_PREVIEW_CHARS]}"
    return text


def format_date(value: Optional[str]) -> str:
    """M/D/YYYY in UTC, 'No date' when absent, 'Invalid date' when unparsable."""
    if not value:
        return "No date"
    parsed = parse_salesforce_datetime(value)
    if parsed is None:
        return "Invalid date"
    parsed = parsed.astimezone(timezone.utc)
    return f"{parsed.month}/{parsed.day}/{parsed.year}"


def metadata_for(record: ActivityRecord) -> dict[str, str]:
    data = {
        "Type": record.type_label or "Email",
        "Status": record.status or "Unknown",
        "Date": format_date(record.raw_date),
    }
    if record.call_type:
        data["Call Type"] = record.call_type
    return data


class JourneyTransformer:
    """
    Lays records out on the x axis in the order given, bracketed by start
    and end markers. Positions depend only on index, never on content.
    """

    START_X = -10
    STEP = 4
    EVENT_DURATION = 2.5

    def position(self, index: int) -> tuple[int, int, int]:
        return (self.START_X + index * self.STEP, 0, 0)

    def to_event(self, record: ActivityRecord, index: int) -> JourneyEvent:
        """Event for the record at visual index (1-based; 0 is the start marker)."""
        return JourneyEvent(
            category=classify(record),
            position=self.position(index),
            duration_seconds=self.EVENT_DURATION,
            sentiment=sentiment_for(record),
            description=describe(record),
            metadata=metadata_for(record),
        )

    def events(self, records: Sequence[ActivityRecord]) -> list[JourneyEvent]:
        """START, one event per record, END. Always len(records) + 2 events."""
        events = [
            JourneyEvent(
                category=EventCategory.START,
                position=self.position(0),
                description=START_DESCRIPTION,
            )
        ]
        for index, record in enumerate(records, start=1):
            events.append(self.to_event(record, index))
        events.append(
            JourneyEvent(
                category=EventCategory.END,
                position=self.position(len(records) + 1),
                description=END_DESCRIPTION,
            )
        )
        return events

    def transform(self, records: Sequence[ActivityRecord], contact: Contact) -> Journey:
        """Build the contact's journey from records already in chronological order."""
        events = self.events(records)
        logger.info("Generated journey with %d events for %s", len(events), contact.id)
        return assemble(contact, events)
