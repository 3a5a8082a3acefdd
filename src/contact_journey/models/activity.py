"""Typed activity records: the Task / Event / EmailMessage tagged union."""

from datetime import datetime, timezone
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

_DATE_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d",
)


def parse_salesforce_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a Salesforce date or datetime string into an aware datetime.
    Date-only and naive values are taken as UTC. Returns None when unparsable.
    """
    if not value or not value.strip():
        return None
    value = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    return None


class _ActivityBase(BaseModel):
    """Fields shared by every activity variant. Field aliases are the SOQL column names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(default=None, alias="Id")
    subject: Optional[str] = Field(default=None, alias="Subject")

    @property
    def type_label(self) -> Optional[str]:
        return None

    @property
    def status(self) -> Optional[str]:
        return None

    @property
    def call_type(self) -> Optional[str]:
        return None

    @property
    def body(self) -> Optional[str]:
        return None

    @property
    def raw_date(self) -> Optional[str]:
        """The record's single date field, as sent upstream."""
        return None

    @property
    def has_message_timestamp(self) -> bool:
        return False

    @property
    def timestamp(self) -> Optional[datetime]:
        return parse_salesforce_datetime(self.raw_date)


class TaskRecord(_ActivityBase):
    """Task row: calls, to-dos, logged emails."""

    kind: Literal["task"] = "task"
    description: Optional[str] = Field(default=None, alias="Description")
    type: Optional[str] = Field(default=None, alias="Type")
    task_status: Optional[str] = Field(default=None, alias="Status")
    task_call_type: Optional[str] = Field(default=None, alias="CallType")
    activity_date: Optional[str] = Field(default=None, alias="ActivityDate")

    @property
    def type_label(self) -> Optional[str]:
        return self.type

    @property
    def status(self) -> Optional[str]:
        return self.task_status

    @property
    def call_type(self) -> Optional[str]:
        return self.task_call_type

    @property
    def body(self) -> Optional[str]:
        return self.description

    @property
    def raw_date(self) -> Optional[str]:
        return self.activity_date


class EventRecord(_ActivityBase):
    """Calendar event row: meetings, scheduled calls."""

    kind: Literal["event"] = "event"
    description: Optional[str] = Field(default=None, alias="Description")
    type: Optional[str] = Field(default=None, alias="Type")
    activity_date: Optional[str] = Field(default=None, alias="ActivityDate")

    @property
    def type_label(self) -> Optional[str]:
        return self.type

    @property
    def body(self) -> Optional[str]:
        return self.description

    @property
    def raw_date(self) -> Optional[str]:
        return self.activity_date


class EmailMessageRecord(_ActivityBase):
    """Email message row matched by the contact's address. Has no type label."""

    kind: Literal["email_message"] = "email_message"
    text_body: Optional[str] = Field(default=None, alias="TextBody")
    message_status: Optional[str] = Field(default=None, alias="Status")
    message_date: Optional[str] = Field(default=None, alias="MessageDate")

    @property
    def status(self) -> Optional[str]:
        return self.message_status

    @property
    def body(self) -> Optional[str]:
        return self.text_body

    @property
    def raw_date(self) -> Optional[str]:
        return self.message_date

    @property
    def has_message_timestamp(self) -> bool:
        return bool(self.message_date)


ActivityRecord = Annotated[
    Union[TaskRecord, EventRecord, EmailMessageRecord],
    Field(discriminator="kind"),
]
