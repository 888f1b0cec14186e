from __future__ import annotations

import re
from datetime import datetime, timezone

# RFC 3339 profile of ISO 8601: full date, 'T', full time, mandatory offset.
_RFC3339_RE = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})[Tt](?P<time>\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?(?P<offset>[Zz]|[+-]\d{2}:\d{2})$"
)

# Value reported for a stored due_date that cannot be parsed.
ZERO_TIME = datetime.min.replace(tzinfo=timezone.utc)


# PUBLIC_INTERFACE
def parse_rfc3339(value: str) -> datetime:
    """
    Parse an RFC 3339 timestamp into an aware datetime.

    Fractional seconds beyond microsecond precision are truncated. A 'Z'
    designator is read as UTC.

    Raises:
        ValueError: if the text is not an RFC 3339 timestamp.
    """
    m = _RFC3339_RE.fullmatch(value)
    if not m:
        raise ValueError(
            f"invalid RFC 3339 timestamp {value!r}; expected e.g. '2025-01-31T13:45:00Z'"
        )

    text = f"{m.group('date')}T{m.group('time')}"
    frac = m.group("frac")
    if frac:
        text += "." + frac[:6].ljust(6, "0")
    offset = m.group("offset")
    text += "+00:00" if offset in ("Z", "z") else offset
    return datetime.fromisoformat(text)


# PUBLIC_INTERFACE
def format_rfc3339(value: datetime) -> str:
    """Format an aware datetime as RFC 3339, using 'Z' for UTC."""
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError("cannot format a naive datetime as RFC 3339")
    text = value.isoformat()
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text
