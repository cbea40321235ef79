"""
RFC3339 timestamps as carried by CoT `time`, `start` and `stale` attributes.

On the wire every timestamp is written with millisecond precision and a literal
`Z` suffix, e.g. `2023-08-21T12:47:02.283Z`. Any RFC3339 offset is accepted on
input and normalized to UTC.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer
from pydantic_core import PydanticCustomError

from cot_proto.errors import MalformedTimestampError

_RFC3339 = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt ](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
    r"(?:([Zz])|([+-])(\d{2}):(\d{2}))$"
)


def normalize_timestamp(value: datetime) -> datetime:
    """Convert to UTC and drop anything finer than a millisecond.

    Naive datetimes are taken to be UTC already.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def parse_timestamp(text: str, field: str = "") -> datetime:
    """Parse an RFC3339 timestamp into an aware UTC datetime.

    A leap second (`:60`) is held at the last millisecond of the minute.
    """
    match = _RFC3339.match(text)
    if match is None:
        raise MalformedTimestampError(text, field or None)
    year, month, day, hour, minute, second, fraction, zulu, sign, off_h, off_m = match.groups()
    micros = int((fraction or "0")[:6].ljust(6, "0"))
    if second == "60":
        second, micros = "59", 999999
    try:
        if zulu:
            tz = timezone.utc
        else:
            offset = timedelta(hours=int(off_h), minutes=int(off_m))
            tz = timezone(-offset if sign == "-" else offset)
        value = datetime(
            int(year), int(month), int(day),
            int(hour), int(minute), int(second), micros,
            tzinfo=tz,
        )
        return normalize_timestamp(value)
    except (ValueError, OverflowError) as err:
        raise MalformedTimestampError(text, field or None) from err


def format_timestamp(value: datetime) -> str:
    value = normalize_timestamp(value)
    return f"{value.year:04d}-{value:%m-%dT%H:%M:%S}.{value.microsecond // 1000:03d}Z"


def _validate_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        try:
            return normalize_timestamp(value)
        except OverflowError:
            pass
    elif isinstance(value, str):
        try:
            return parse_timestamp(value)
        except MalformedTimestampError:
            pass
    raise PydanticCustomError(
        "malformed_timestamp",
        "not an RFC3339 timestamp: {value}",
        {"value": str(value)},
    )


# Use this for timestamp fields in detail schemas as well as in the envelope.
Timestamp = Annotated[
    datetime,
    BeforeValidator(_validate_timestamp),
    PlainSerializer(format_timestamp, return_type=str),
]
