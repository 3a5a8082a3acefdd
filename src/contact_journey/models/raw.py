"""Raw query row representation before normalization."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RawRecord(BaseModel):
    """
    Untyped row from a SOQL query response, tagged with the source that produced it.
    Sources turn these into typed activity records.
    """

    model_config = ConfigDict(extra="allow")

    source_id: str = ""
    data: dict[str, Any] = Field(default_factory=dict)
