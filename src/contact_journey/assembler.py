"""Final journey payload composition."""

from collections.abc import Iterable

from contact_journey.models.contact import Contact
from contact_journey.models.journey import DEFAULT_THEME, Journey, JourneyEvent


def journey_title(contact: Contact) -> str:
    return f"{contact.display_name}'s Journey"


def assemble(contact: Contact, events: Iterable[JourneyEvent]) -> Journey:
    """Wrap events with the contact's title and the fixed theme."""
    return Journey(title=journey_title(contact), theme=DEFAULT_THEME, events=tuple(events))
