"""Data models for credentials, contacts, activity records and journeys."""

from contact_journey.models.activity import (
    ActivityRecord,
    EmailMessageRecord,
    EventRecord,
    TaskRecord,
    parse_salesforce_datetime,
)
from contact_journey.models.contact import Contact
from contact_journey.models.credential import Credential
from contact_journey.models.journey import (
    DEFAULT_THEME,
    EventCategory,
    Journey,
    JourneyEvent,
    Sentiment,
    Theme,
)
from contact_journey.models.raw import RawRecord

__all__ = [
    "ActivityRecord",
    "Contact",
    "Credential",
    "DEFAULT_THEME",
    "EmailMessageRecord",
    "EventCategory",
    "EventRecord",
    "Journey",
    "JourneyEvent",
    "RawRecord",
    "Sentiment",
    "TaskRecord",
    "Theme",
    "parse_salesforce_datetime",
]
