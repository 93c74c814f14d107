# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_interval

import re
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from dateparser import parse

from coreason_interval.exceptions import ParseFailureError
from coreason_interval.interval import TimeInterval
from coreason_interval.utils.logger import logger

# Tolerances such as "24h", "-90 minutes", "1.5d" or plain seconds ("3600")
TOLERANCE_REGEX = re.compile(
    r"^(?P<sign>[+-])?(?P<value>\d+(?:\.\d+)?)\s*"
    r"(?P<unit>weeks?|w|days?|d|hours?|hrs?|h|minutes?|mins?|m|seconds?|secs?|s|milliseconds?|ms|microseconds?|us)?$",
    re.IGNORECASE,
)

UNIT_ALIASES: Dict[str, str] = {
    "w": "weeks",
    "week": "weeks",
    "d": "days",
    "day": "days",
    "h": "hours",
    "hr": "hours",
    "hour": "hours",
    "m": "minutes",
    "min": "minutes",
    "minute": "minutes",
    "s": "seconds",
    "sec": "seconds",
    "second": "seconds",
    "ms": "milliseconds",
    "millisecond": "milliseconds",
    "us": "microseconds",
    "microsecond": "microseconds",
}


def _normalize_unit(unit: Optional[str]) -> str:
    if not unit:
        return "seconds"
    unit = unit.lower()
    if unit in UNIT_ALIASES:
        return UNIT_ALIASES[unit]
    # Plural forms ("hours", "mins", "hrs")
    return UNIT_ALIASES[unit.rstrip("s")]


def parse_timestamp(value: str, pattern: Optional[str] = None) -> datetime:
    """
    Parses a single timestamp string.

    With a pattern the string must match it exactly (strptime semantics). Without one,
    dateparser reads any common date format. Naive results are pinned to UTC.

    Args:
        value: The timestamp string.
        pattern: Optional strptime pattern, e.g. "%Y-%m-%d %H:%M %Z".

    Returns:
        A timezone-aware datetime.

    Raises:
        ParseFailureError: If the string cannot be parsed.
    """
    if pattern is not None:
        try:
            parsed: Optional[datetime] = datetime.strptime(value, pattern)
        except ValueError as e:
            raise ParseFailureError(value, pattern, str(e)) from e
    else:
        parsed = parse(value)

    if parsed is None:
        raise ParseFailureError(value, pattern)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_interval(start: Optional[str], end: Optional[str], pattern: Optional[str] = None) -> TimeInterval:
    """
    Builds a TimeInterval from two timestamp strings.

    A missing string is passed through as a missing time, so TimeInterval.create
    raises MissingStartTimeError / MissingEndTimeError for it. Unreadable strings
    raise ParseFailureError.
    """
    start_time = parse_timestamp(start, pattern) if start is not None else None
    end_time = parse_timestamp(end, pattern) if end is not None else None
    interval = TimeInterval.create(start_time, end_time)
    logger.debug(f"Parsed interval {interval} from '{start}' / '{end}'")
    return interval


def parse_tolerance(value: str) -> timedelta:
    """
    Parses a tolerance duration such as "24h", "90 minutes", "-1d" or "3600".

    A bare number is read as seconds.

    Raises:
        ParseFailureError: If the string is not a recognised duration.
    """
    match = TOLERANCE_REGEX.match(value.strip())
    if not match:
        raise ParseFailureError(value, reason="expected a number followed by an optional unit (e.g. 24h, 30m)")

    unit = _normalize_unit(match.group("unit"))
    amount = float(match.group("value"))
    if match.group("sign") == "-":
        amount = -amount

    try:
        return timedelta(**{unit: amount})
    except (OverflowError, ValueError) as e:
        raise ParseFailureError(value, reason=str(e)) from e
