"""Registry of activity sources, in the order their records are merged."""

from typing import Optional, Type

from contact_journey.config import Settings
from contact_journey.sources.base import ActivitySource
from contact_journey.sources.email_messages import EmailMessageSource
from contact_journey.sources.events import EventSource
from contact_journey.sources.tasks import TaskSource


class SourceRegistry:
    """Provides the activity sources queried for every journey."""

    _sources: dict[str, Type[ActivitySource]] = {
        "task": TaskSource,
        "event": EventSource,
        "email_message": EmailMessageSource,
    }

    @classmethod
    def available_sources(cls) -> list[str]:
        """Return source identifiers in merge order."""
        return list(cls._sources.keys())

    @classmethod
    def default_sources(cls, settings: Optional[Settings] = None) -> list[ActivitySource]:
        """One instance of every registered source, configured from settings."""
        settings = settings or Settings()
        return [cls._sources[source_id].from_settings(settings) for source_id in cls.available_sources()]
