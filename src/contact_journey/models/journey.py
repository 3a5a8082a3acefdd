"""Journey output models: what the visualization client consumes."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class EventCategory(str, Enum):
    """Visual event type. Boundary markers serialize lower-case, as the client expects."""

    START = "start"
    PHONE_CALL = "PHONE_CALL"
    EMAIL = "EMAIL"
    MEETING = "MEETING"
    SUPPORT = "SUPPORT"
    END = "end"

    @property
    def is_boundary(self) -> bool:
        return self in (EventCategory.START, EventCategory.END)


class Sentiment(str, Enum):
    """Coarse emotional tone attached to an event."""

    HAPPY = "happy"
    CONTENT = "content"
    CURIOUS = "curious"
    NEUTRAL = "neutral"
    CONCERNED = "concerned"


class JourneyEvent(BaseModel):
    """One positioned event on the timeline."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    category: EventCategory = Field(..., alias="type")
    position: tuple[int, int, int]
    duration_seconds: Optional[float] = Field(default=None, alias="eventDuration")
    sentiment: Optional[Sentiment] = None
    description: str = ""
    metadata: Optional[dict[str, str]] = Field(default=None, alias="data")


class Theme(BaseModel):
    """Scene colors. Fixed for every journey."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ground_color: str = Field(default="#f5f5f7", alias="groundColor")
    grid_color: str = Field(default="#cccccc", alias="gridColor")
    sky_top_color: str = Field(default="#a0c3ff", alias="skyTopColor")
    sky_bottom_color: str = Field(default="#f0f8ff", alias="skyBottomColor")
    purchase_coin_color: str = Field(default="#ffd700", alias="purchaseCoinColor")


DEFAULT_THEME = Theme()


class Journey(BaseModel):
    """Title, theme and ordered events for one contact."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(..., alias="journeyTitle")
    theme: Theme = Field(default_factory=Theme)
    events: tuple[JourneyEvent, ...] = ()

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict using the client's field names; absent fields are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
