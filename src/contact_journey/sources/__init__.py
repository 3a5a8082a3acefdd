"""Activity sources queried per journey."""

from contact_journey.sources.base import ActivitySource
from contact_journey.sources.email_messages import EmailMessageSource
from contact_journey.sources.events import EventSource
from contact_journey.sources.registry import SourceRegistry
from contact_journey.sources.tasks import TaskSource

__all__ = [
    "ActivitySource",
    "EmailMessageSource",
    "EventSource",
    "SourceRegistry",
    "TaskSource",
]
