"""
Timestamp normalization for VEX documents.

Source timestamps look like '2024-01-15 10:30:00.123456' (no timezone, always
six fractional digits). They are treated as UTC and rewritten to RFC3339 with
nanosecond precision, e.g. '2024-01-15T10:30:00.123456Z'.
"""

import re
import logging
from datetime import datetime, timezone

from .errors import TimestampFormatError

logger = logging.getLogger(__name__)

SOURCE_FORMAT = "%Y-%m-%d %H:%M:%S.%f"

# strptime alone accepts one-digit fields and short fractions, so the shape is checked first
SOURCE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{6}$')

RFC3339_UTC_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{1,9})?Z$')


def parse_source_timestamp(value) -> datetime:
    """Parses a source timestamp into an aware UTC datetime."""
    if not isinstance(value, str) or not SOURCE_PATTERN.match(value):
        raise TimestampFormatError(value)
    try:
        parsed = datetime.strptime(value, SOURCE_FORMAT)
    except ValueError:
        # Right shape, out-of-range field (month 13, Feb 30, hour 24...)
        raise TimestampFormatError(value) from None
    return parsed.replace(tzinfo=timezone.utc)


def format_rfc3339_nano(moment: datetime) -> str:
    """
    Formats an aware datetime as RFC3339 in UTC with nanosecond precision.
    Trailing zeros of the fraction are removed and a zero fraction is omitted.
    """
    moment = moment.astimezone(timezone.utc)
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    nanos = moment.microsecond * 1000
    if nanos:
        text += "." + f"{nanos:09d}".rstrip("0")
    return text + "Z"


def normalize_timestamp(value) -> str:
    """
    Rewrites 'YYYY-MM-DD HH:MM:SS.ffffff' as an RFC3339 UTC string ending in 'Z'.

    Raises TimestampFormatError if the value does not match the source format.
    """
    normalized = format_rfc3339_nano(parse_source_timestamp(value))
    logger.debug(f"Normalized timestamp {value!r} -> {normalized!r}")
    return normalized


def is_rfc3339_utc(value) -> bool:
    """True if value looks like a normalized timestamp and is a real instant."""
    if not isinstance(value, str) or not RFC3339_UTC_PATTERN.match(value):
        return False
    # fromisoformat before 3.11 takes neither 'Z' nor more than six fractional digits
    head, _, fraction = value[:-1].partition(".")
    try:
        datetime.strptime(head, "%Y-%m-%dT%H:%M:%S")
    except ValueError:
        return False
    return not fraction or fraction[-1] != "0"
