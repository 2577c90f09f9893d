"""Timestamp Codec — converts between UTC datetimes and the text stored in TEXT columns.

Invariants:
    - Write path emits exactly one layout: CANONICAL_FORMAT (RFC 3339, UTC, whole seconds)
    - None encodes to SQL NULL; NULL decodes to None (never an error)
    - Read path tries READ_LAYOUTS in order and returns on the first match
    - Every decoded value is timezone-aware UTC truncated to the second,
      so encode(decode(text)) == text for canonical text

Design Decisions:
    - Second precision on both paths: sub-second digits in memory are dropped on
      write, and legacy nanosecond rows are accepted on read but cut to seconds
    - Naive datetimes are taken to be UTC (SQLite CURRENT_TIMESTAMP is UTC)
"""

import re
from datetime import datetime, timezone

from voting.core.errors import MalformedTimestampError


CANONICAL_FORMAT: str = "%Y-%m-%dT%H:%M:%SZ"

# Priority order matters: canonical first, store default second, date-only last.
READ_LAYOUTS: tuple[str, ...] = (
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d",
)

_LONG_FRACTION = re.compile(r"(\.\d{6})\d+")


def ensure_utc(value: datetime) -> datetime:
    """Normalise to aware UTC at second granularity."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.replace(microsecond=0)


def utc_now() -> datetime:
    return ensure_utc(datetime.now(timezone.utc))


def encode_timestamp(value: datetime | None) -> str | None:
    """Serialize for a TEXT column. None → NULL."""
    if value is None:
        return None
    return ensure_utc(value).strftime(CANONICAL_FORMAT)


def decode_timestamp(value: object) -> datetime | None:
    """Parse a TEXT column value. NULL → None."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedTimestampError(value)

    text = _LONG_FRACTION.sub(r"\1", value.strip())
    for layout in READ_LAYOUTS:
        try:
            parsed = datetime.strptime(text, layout)
        except ValueError:
            continue
        return ensure_utc(parsed)

    raise MalformedTimestampError(value)
