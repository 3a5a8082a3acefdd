"""Chronological ordering of activity records from every source."""

from collections.abc import Iterable
from datetime import datetime, timezone

from contact_journey.models.activity import ActivityRecord

# Undated and unparsable records sort before every real date
SENTINEL_DATE = datetime.min.replace(tzinfo=timezone.utc)


def sort_key(record: ActivityRecord) -> datetime:
    """The record's timestamp, or the sentinel when it has none."""
    return record.timestamp or SENTINEL_DATE


def merge_chronologically(*record_lists: Iterable[ActivityRecord]) -> list[ActivityRecord]:
    """
    Concatenate record lists in the given order and sort by timestamp.
    The sort is stable: equal timestamps keep their discovery order.
    """
    merged = [record for records in record_lists for record in records]
    merged.sort(key=sort_key)
    return merged
