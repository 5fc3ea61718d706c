"""
Parsing & formatting of the API timestamps.

Kubernetes has two kinds of them: ``Time`` (RFC 3339 with seconds precision)
and ``MicroTime`` (RFC 3339 with microseconds precision), both are always
rendered in UTC with the ``Z`` suffix. The parsing is tolerant to any
ISO 8601 input, as produced by other clients or typed by humans.
"""
import datetime

import iso8601

TIME_FORMAT = '%Y-%m-%dT%H:%M:%SZ'
MICRO_TIME_FORMAT = '%Y-%m-%dT%H:%M:%S.%fZ'


def parse(value: datetime.datetime | str) -> datetime.datetime:
    """
    Convert a timestamp into a timezone-aware datetime in UTC.

    Naive datetimes and strings without a timezone are assumed to be in UTC.
    """
    if isinstance(value, datetime.datetime):
        dt = value
    elif isinstance(value, str):
        try:
            dt = iso8601.parse_date(value, default_timezone=datetime.timezone.utc)
        except iso8601.ParseError as e:
            raise ValueError(f"Invalid timestamp: {value!r}") from e
    else:
        raise TypeError(f"Timestamps must be datetimes or strings, got {value!r}")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(datetime.timezone.utc)


def format_time(dt: datetime.datetime) -> str:
    return parse(dt).strftime(TIME_FORMAT)


def format_micro_time(dt: datetime.datetime) -> str:
    return parse(dt).strftime(MICRO_TIME_FORMAT)
