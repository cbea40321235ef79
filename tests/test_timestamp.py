"""Tests for RFC3339 timestamp handling."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import BaseModel, ValidationError

from cot_proto import MalformedTimestampError, Timestamp, format_timestamp, parse_timestamp

UTC = timezone.utc


class TestParse:
    def test_zulu_millis(self):
        assert parse_timestamp("2023-08-21T12:47:02.283Z") == datetime(2023, 8, 21, 12, 47, 2, 283000, tzinfo=UTC)

    def test_offset_normalized_to_utc(self):
        value = parse_timestamp("2023-08-21T14:47:02.283+02:00")
        assert value == datetime(2023, 8, 21, 12, 47, 2, 283000, tzinfo=UTC)
        assert value.utcoffset() == timedelta(0)

    def test_negative_offset(self):
        assert parse_timestamp("2023-08-21T07:47:02-05:00") == datetime(2023, 8, 21, 12, 47, 2, tzinfo=UTC)

    def test_short_fraction(self):
        assert parse_timestamp("2005-04-05T11:43:38.07Z").microsecond == 70000

    def test_sub_millisecond_truncated(self):
        assert parse_timestamp("2023-10-24T03:16:14.897441Z").microsecond == 897000

    def test_no_fraction_lowercase_separators(self):
        assert parse_timestamp("2023-07-21t11:52:33z") == datetime(2023, 7, 21, 11, 52, 33, tzinfo=UTC)

    def test_leap_second_held_at_end_of_minute(self):
        value = parse_timestamp("2016-12-31T23:59:60Z")
        assert value == datetime(2016, 12, 31, 23, 59, 59, 999000, tzinfo=UTC)

    def test_early_year(self):
        assert parse_timestamp("0999-01-01T00:00:00.000Z") == datetime(999, 1, 1, tzinfo=UTC)

    @pytest.mark.parametrize("text", [
        "yesterday",
        "2023-10- 24T03:16:14.985238Z",
        "2023-08-21T12:47:02",
        "2023-13-01T00:00:00Z",
        "2023-02-30T00:00:00Z",
        "2023-08-21",
        "",
        " 2024-05-01T10:00:00Z ",
        "2024-05-01T10:00:61Z",
        "0001-01-01T00:00:00+01:00",
        "9999-12-31T23:30:00-01:00",
    ])
    def test_malformed(self, text):
        with pytest.raises(MalformedTimestampError) as exc:
            parse_timestamp(text, "time")
        assert exc.value.value == text
        assert exc.value.field == "time"


class TestFormat:
    def test_millis_and_z_suffix(self):
        value = datetime(2023, 8, 21, 12, 47, 2, 283000, tzinfo=UTC)
        assert format_timestamp(value) == "2023-08-21T12:47:02.283Z"

    def test_whole_seconds_pad_millis(self):
        assert format_timestamp(datetime(2005, 4, 5, 11, 43, 38, tzinfo=UTC)) == "2005-04-05T11:43:38.000Z"

    def test_offset_converted(self):
        value = datetime(2023, 8, 21, 14, 47, 2, 283999, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(value) == "2023-08-21T12:47:02.283Z"

    def test_naive_taken_as_utc(self):
        assert format_timestamp(datetime(2024, 1, 1)) == "2024-01-01T00:00:00.000Z"

    def test_year_zero_padded(self):
        assert format_timestamp(datetime(999, 1, 1, tzinfo=UTC)) == "0999-01-01T00:00:00.000Z"
        assert format_timestamp(datetime(5, 3, 4, 1, 2, 3, tzinfo=UTC)) == "0005-03-04T01:02:03.000Z"


class Stamped(BaseModel):
    at: Timestamp


def test_timestamp_field_accepts_text_and_datetime():
    assert Stamped(at="2024-01-01T00:00:00.5Z").at == datetime(2024, 1, 1, 0, 0, 0, 500000, tzinfo=UTC)
    assert Stamped(at=datetime(2024, 1, 1, 0, 0, 0, 123456)).at.microsecond == 123000


def test_timestamp_field_serializes_to_wire_format():
    stamped = Stamped(at="2024-01-01T02:00:00+02:00")
    assert stamped.model_dump() == {"at": "2024-01-01T00:00:00.000Z"}


def test_timestamp_field_error_type():
    with pytest.raises(ValidationError) as exc:
        Stamped(at="soon")
    assert exc.value.errors()[0]["type"] == "malformed_timestamp"


def test_timestamp_field_out_of_range_datetime():
    edge = datetime(1, 1, 1, tzinfo=timezone(timedelta(hours=1)))
    with pytest.raises(ValidationError) as exc:
        Stamped(at=edge)
    assert exc.value.errors()[0]["type"] == "malformed_timestamp"
