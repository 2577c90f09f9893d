"""Timestamp Codec — canonical write layout, tolerant read layouts, NULL handling.

Tests:
    - RFC 3339 round-trip is exact at second granularity
    - None <-> NULL in both directions
    - SQLite CURRENT_TIMESTAMP and date-only layouts decode as UTC
    - Sub-second digits are dropped on write and on read
    - Unknown layouts raise MalformedTimestampError
"""

from datetime import datetime, timedelta, timezone

import pytest

from voting.core.errors import ErrorKind, MalformedTimestampError
from voting.core.timestamps import (
    CANONICAL_FORMAT, decode_timestamp, encode_timestamp, ensure_utc, utc_now,
)


def test_canonical_text_round_trips():
    moment = decode_timestamp("2024-01-15T19:05:00Z")
    assert moment == datetime(2024, 1, 15, 19, 5, 0, tzinfo=timezone.utc)
    assert encode_timestamp(moment) == "2024-01-15T19:05:00Z"


def test_encode_none_is_null():
    assert encode_timestamp(None) is None


def test_decode_null_is_none():
    assert decode_timestamp(None) is None


def test_decode_store_default_layout():
    moment = decode_timestamp("2025-11-30 14:42:19")
    assert moment == datetime(2025, 11, 30, 14, 42, 19, tzinfo=timezone.utc)
    assert moment.tzinfo is not None


def test_decode_date_only_is_midnight_utc():
    assert decode_timestamp("2025-11-30") == datetime(2025, 11, 30, tzinfo=timezone.utc)


def test_decode_numeric_offset_normalises_to_utc():
    moment = decode_timestamp("2024-01-15T21:05:00+02:00")
    assert moment == datetime(2024, 1, 15, 19, 5, 0, tzinfo=timezone.utc)
    assert moment.utcoffset() == timedelta(0)


def test_decode_nanosecond_fraction_truncates_to_second():
    moment = decode_timestamp("2024-01-15T19:05:00.123456789Z")
    assert moment == datetime(2024, 1, 15, 19, 5, 0, tzinfo=timezone.utc)


def test_encode_drops_sub_second_digits():
    moment = datetime(2024, 1, 15, 19, 5, 0, 999999, tzinfo=timezone.utc)
    assert encode_timestamp(moment) == "2024-01-15T19:05:00Z"


def test_encode_treats_naive_as_utc():
    assert encode_timestamp(datetime(2024, 1, 15, 19, 5)) == "2024-01-15T19:05:00Z"


@pytest.mark.parametrize("value", ["", "yesterday", "15/01/2024", "2024-13-45T00:00:00Z"])
def test_decode_rejects_unknown_layouts(value):
    with pytest.raises(MalformedTimestampError) as exc:
        decode_timestamp(value)
    assert exc.value.kind is ErrorKind.MALFORMED_TIMESTAMP


def test_decode_rejects_non_text():
    with pytest.raises(MalformedTimestampError):
        decode_timestamp(1700000000)


def test_utc_now_is_aware_and_whole_seconds():
    now = utc_now()
    assert now.tzinfo is not None
    assert now.microsecond == 0
    assert encode_timestamp(now) == now.strftime(CANONICAL_FORMAT)


def test_ensure_utc_converts_offsets():
    tz = timezone(timedelta(hours=-3))
    assert ensure_utc(datetime(2024, 1, 1, 9, 0, tzinfo=tz)) == datetime(
        2024, 1, 1, 12, 0, tzinfo=timezone.utc,
    )
