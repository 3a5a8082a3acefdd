"""SOQL literal handling."""

import re

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def sanitize_record_id(value: object) -> str:
    """Reduce a record id to its alphanumeric characters. May return an empty string."""
    if value is None:
        return ""
    return _NON_ALNUM.sub("", str(value))


def escape_literal(value: str) -> str:
    """Escape a value for use inside a single-quoted SOQL string literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def escape_like(value: str) -> str:
    """Escape a value for a LIKE pattern, so % and _ match literally."""
    return escape_literal(value).replace("%", "\\%").replace("_", "\\_")
