# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_interval

"""
Allen's interval algebra over raw instants.

Each relation is a standalone predicate over the bounds of two intervals A and B.
The adjacency predicates (precedes, meets, met_by, preceded_by) take a tolerance:
the gap between the intervals that counts as "touching". The other nine ignore it.

get_interval_relation scans RELATION_PRIORITY in order and returns the first state
whose predicate holds, so the result is deterministic even for reversed intervals.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, Dict, Tuple

from coreason_interval.utils.logger import logger

DEFAULT_TOLERANCE = timedelta(0)

Predicate = Callable[[datetime, datetime, datetime, datetime, timedelta], bool]


class RelationState(str, Enum):
    """
    The 13 basic relations of Allen's Interval Algebra, plus UNKNOWN.

    UNKNOWN is returned when no relation holds or the second interval is missing.
    """

    UNKNOWN = "UNKNOWN"

    # A precedes B (B preceded by A)
    PRECEDES = "PRECEDES"
    PRECEDED_BY = "PRECEDED_BY"

    # A meets B (B met by A)
    MEETS = "MEETS"
    MET_BY = "MET_BY"

    # A overlaps B (B overlapped by A)
    OVERLAPS = "OVERLAPS"
    OVERLAPPED_BY = "OVERLAPPED_BY"

    # A is finished by B (B finishes A)
    FINISHED_BY = "FINISHED_BY"
    FINISHES = "FINISHES"

    # A contains B (B during A)
    CONTAINS = "CONTAINS"
    DURING = "DURING"

    # A starts B (B started by A)
    STARTS = "STARTS"
    STARTED_BY = "STARTED_BY"

    EQUALS = "EQUALS"

    @property
    def converse(self) -> "RelationState":
        """The relation B has to A when A has this relation to B."""
        return CONVERSES[self]


CONVERSES: Dict[RelationState, RelationState] = {
    RelationState.UNKNOWN: RelationState.UNKNOWN,
    RelationState.PRECEDES: RelationState.PRECEDED_BY,
    RelationState.PRECEDED_BY: RelationState.PRECEDES,
    RelationState.MEETS: RelationState.MET_BY,
    RelationState.MET_BY: RelationState.MEETS,
    RelationState.OVERLAPS: RelationState.OVERLAPPED_BY,
    RelationState.OVERLAPPED_BY: RelationState.OVERLAPS,
    RelationState.FINISHED_BY: RelationState.FINISHES,
    RelationState.FINISHES: RelationState.FINISHED_BY,
    RelationState.CONTAINS: RelationState.DURING,
    RelationState.DURING: RelationState.CONTAINS,
    RelationState.STARTS: RelationState.STARTED_BY,
    RelationState.STARTED_BY: RelationState.STARTS,
    RelationState.EQUALS: RelationState.EQUALS,
}


def as_instant(value: datetime) -> datetime:
    """
    Returns a datetime that compares on the absolute instant.

    Naive datetimes are read as UTC. Aware ones are converted to UTC, since two values
    sharing a zone object compare on wall-clock time and ignore the offset and fold.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# Adjacency relations: the only ones that use the tolerance.


def precedes(
    start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime, tolerance: timedelta = DEFAULT_TOLERANCE
) -> bool:
    """A precedes B: the gap from A's end to B's start is larger than the tolerance."""
    return start_b - end_a > tolerance


def preceded_by(
    start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime, tolerance: timedelta = DEFAULT_TOLERANCE
) -> bool:
    """A is preceded by B: the gap from B's end to A's start is larger than the tolerance."""
    return start_a - end_b > tolerance


def meets(
    start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime, tolerance: timedelta = DEFAULT_TOLERANCE
) -> bool:
    """
    A meets B: B starts exactly `tolerance` after A ends.

    The comparison is exact. With microsecond timestamps a gap that is off by one
    microsecond is PRECEDES or nothing at all, never MEETS.
    """
    return start_b - end_a == tolerance


def met_by(
    start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime, tolerance: timedelta = DEFAULT_TOLERANCE
) -> bool:
    """A is met by B: A starts exactly `tolerance` after B ends."""
    return start_a - end_b == tolerance


# Tolerance-free relations. `tolerance` is accepted so every predicate fits RELATION_PRIORITY.


def overlaps(
    start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime, tolerance: timedelta = DEFAULT_TOLERANCE
) -> bool:
    """A starts first, B starts inside A, and A ends inside B."""
    return start_a < start_b < end_a < end_b


def overlapped_by(
    start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime, tolerance: timedelta = DEFAULT_TOLERANCE
) -> bool:
    return start_b < start_a < end_b < end_a


def finished_by(
    start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime, tolerance: timedelta = DEFAULT_TOLERANCE
) -> bool:
    """A starts earlier and both end together."""
    return start_a < start_b and end_a == end_b


def finishes(
    start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime, tolerance: timedelta = DEFAULT_TOLERANCE
) -> bool:
    return start_a > start_b and end_a == end_b


def contains(
    start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime, tolerance: timedelta = DEFAULT_TOLERANCE
) -> bool:
    """B lies strictly inside A."""
    return start_a < start_b and end_a > end_b


def during(
    start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime, tolerance: timedelta = DEFAULT_TOLERANCE
) -> bool:
    return start_a > start_b and end_a < end_b


def starts(
    start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime, tolerance: timedelta = DEFAULT_TOLERANCE
) -> bool:
    """Same start, A ends first."""
    return start_a == start_b and end_a < end_b


def started_by(
    start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime, tolerance: timedelta = DEFAULT_TOLERANCE
) -> bool:
    return start_a == start_b and end_a > end_b


def equals(
    start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime, tolerance: timedelta = DEFAULT_TOLERANCE
) -> bool:
    return start_a == start_b and end_a == end_b


# Evaluation order for get_interval_relation. First match wins.
RELATION_PRIORITY: Tuple[Tuple[RelationState, Predicate], ...] = (
    (RelationState.PRECEDES, precedes),
    (RelationState.MEETS, meets),
    (RelationState.OVERLAPS, overlaps),
    (RelationState.FINISHED_BY, finished_by),
    (RelationState.CONTAINS, contains),
    (RelationState.STARTS, starts),
    (RelationState.EQUALS, equals),
    (RelationState.STARTED_BY, started_by),
    (RelationState.DURING, during),
    (RelationState.FINISHES, finishes),
    (RelationState.OVERLAPPED_BY, overlapped_by),
    (RelationState.MET_BY, met_by),
    (RelationState.PRECEDED_BY, preceded_by),
)

PREDICATES: Dict[RelationState, Predicate] = dict(RELATION_PRIORITY)


def get_interval_relation(
    start_a: datetime,
    end_a: datetime,
    start_b: datetime,
    end_b: datetime,
    tolerance: timedelta = DEFAULT_TOLERANCE,
) -> RelationState:
    """
    Determines the Allen Interval Algebra relation between two intervals A and B.

    Args:
        start_a: Start time of interval A.
        end_a: End time of interval A.
        start_b: Start time of interval B.
        end_b: End time of interval B.
        tolerance: Gap between the intervals that still counts as MEETS / MET_BY.

    Returns:
        The RelationState describing A's relationship to B, or UNKNOWN if no
        predicate holds (possible with a non-zero tolerance or reversed intervals).
    """
    bounds = (as_instant(start_a), as_instant(end_a), as_instant(start_b), as_instant(end_b))

    for state, predicate in RELATION_PRIORITY:
        if predicate(*bounds, tolerance):
            logger.debug(f"[{start_a}, {end_a}] vs [{start_b}, {end_b}] (tolerance {tolerance}) -> {state.value}")
            return state

    logger.debug(f"No relation between [{start_a}, {end_a}] and [{start_b}, {end_b}] (tolerance {tolerance})")
    return RelationState.UNKNOWN
