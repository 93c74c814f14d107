# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_interval

from datetime import datetime, timedelta, tzinfo
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from coreason_interval import relations
from coreason_interval.exceptions import MissingEndTimeError, MissingStartTimeError
from coreason_interval.relations import DEFAULT_TOLERANCE, Predicate, RelationState, as_instant
from coreason_interval.schemas import MISSING_INTERVAL_MESSAGE, IntervalSummary, RelationResult
from coreason_interval.utils.logger import logger

DEFAULT_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


class TimeInterval(BaseModel):
    """
    An immutable closed time interval [start, end].

    Comparisons always use the absolute instant: timezone-aware datetimes compare
    across zones, naive datetimes are read as UTC. The fields keep the values exactly
    as supplied, so the original zone is still available for display.

    start <= end is not enforced. Reversed intervals are representable; see `is_reversed`.

    Attributes:
        start: The start time of the interval.
        end: The end time of the interval.
    """

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @classmethod
    def create(cls, start: Optional[datetime], end: Optional[datetime]) -> "TimeInterval":
        """
        Validated constructor.

        Args:
            start: The start time. Must not be None.
            end: The end time. Must not be None.

        Returns:
            A new TimeInterval.

        Raises:
            MissingStartTimeError: If start is None.
            MissingEndTimeError: If end is None.
        """
        if start is None:
            raise MissingStartTimeError()
        if end is None:
            raise MissingEndTimeError()
        return cls(start=start, end=end)

    @property
    def instants(self) -> Tuple[datetime, datetime]:
        """Start and end as comparable absolute instants."""
        return as_instant(self.start), as_instant(self.end)

    @property
    def is_reversed(self) -> bool:
        start, end = self.instants
        return start > end

    def duration(self) -> timedelta:
        """end - start. Negative for a reversed interval."""
        start, end = self.instants
        return end - start

    def equals(self, other: Optional["TimeInterval"]) -> bool:
        """True if both bounds are instant-equal. A missing interval is never equal."""
        if other is None:
            return False
        return self.instants == other.instants

    def format(self, pattern: str = DEFAULT_FORMAT, tz: Optional[tzinfo] = None) -> str:
        """
        Renders the interval as "[start, end]" using a strftime pattern.

        Args:
            pattern: strftime pattern applied to each bound.
            tz: Optional zone to display both bounds in. Defaults to the supplied zones.
        """
        start, end = self.start, self.end
        if tz is not None:
            start, end = as_instant(start).astimezone(tz), as_instant(end).astimezone(tz)
        return f"[{start.strftime(pattern)}, {end.strftime(pattern)}]"

    def __str__(self) -> str:
        return f"[{self.start.isoformat()}, {self.end.isoformat()}]"

    def summary(self) -> IntervalSummary:
        return IntervalSummary(
            start=self.start,
            end=self.end,
            duration=self.duration(),
            reversed=self.is_reversed,
        )

    def _holds(
        self, predicate: Predicate, other: Optional["TimeInterval"], tolerance: timedelta = DEFAULT_TOLERANCE
    ) -> bool:
        if other is None:
            return False
        return predicate(*self.instants, *other.instants, tolerance)

    # Adjacency relations

    def precedes(self, other: Optional["TimeInterval"], tolerance: timedelta = DEFAULT_TOLERANCE) -> bool:
        """True if other starts more than `tolerance` after this interval ends."""
        return self._holds(relations.precedes, other, tolerance)

    def preceded_by(self, other: Optional["TimeInterval"], tolerance: timedelta = DEFAULT_TOLERANCE) -> bool:
        """True if this interval starts more than `tolerance` after other ends."""
        return self._holds(relations.preceded_by, other, tolerance)

    def meets(self, other: Optional["TimeInterval"], tolerance: timedelta = DEFAULT_TOLERANCE) -> bool:
        """True if other starts exactly `tolerance` after this interval ends."""
        return self._holds(relations.meets, other, tolerance)

    def met_by(self, other: Optional["TimeInterval"], tolerance: timedelta = DEFAULT_TOLERANCE) -> bool:
        """True if this interval starts exactly `tolerance` after other ends."""
        return self._holds(relations.met_by, other, tolerance)

    # Tolerance-free relations

    def overlaps(self, other: Optional["TimeInterval"]) -> bool:
        return self._holds(relations.overlaps, other)

    def overlapped_by(self, other: Optional["TimeInterval"]) -> bool:
        return self._holds(relations.overlapped_by, other)

    def finished_by(self, other: Optional["TimeInterval"]) -> bool:
        return self._holds(relations.finished_by, other)

    def finishes(self, other: Optional["TimeInterval"]) -> bool:
        return self._holds(relations.finishes, other)

    def contains(self, other: Optional["TimeInterval"]) -> bool:
        return self._holds(relations.contains, other)

    def during(self, other: Optional["TimeInterval"]) -> bool:
        return self._holds(relations.during, other)

    def starts(self, other: Optional["TimeInterval"]) -> bool:
        return self._holds(relations.starts, other)

    def started_by(self, other: Optional["TimeInterval"]) -> bool:
        return self._holds(relations.started_by, other)

    def is_equal_to(self, other: Optional["TimeInterval"]) -> bool:
        """The EQUALS relation. Same result as `equals`."""
        return self._holds(relations.equals, other)

    def holds(
        self, state: RelationState, other: Optional["TimeInterval"], tolerance: timedelta = DEFAULT_TOLERANCE
    ) -> bool:
        """
        Evaluates a single relation by name.

        Raises:
            ValueError: If state is UNKNOWN, which has no predicate.
        """
        if state is RelationState.UNKNOWN:
            raise ValueError("UNKNOWN is not a relation that can hold")
        return self._holds(relations.PREDICATES[state], other, tolerance)

    def relation(self, other: Optional["TimeInterval"], tolerance: timedelta = DEFAULT_TOLERANCE) -> RelationResult:
        """
        Determines which single Allen relation this interval has to `other`.

        Never raises. A missing `other` yields UNKNOWN with `error` set.

        Args:
            other: The interval to compare against.
            tolerance: Gap that still counts as MEETS / MET_BY; larger gaps are PRECEDES / PRECEDED_BY.

        Returns:
            RelationResult with the matched state.
        """
        if other is None:
            logger.warning(f"Cannot relate {self} to a missing interval")
            return RelationResult(state=RelationState.UNKNOWN, tolerance=tolerance, error=MISSING_INTERVAL_MESSAGE)

        state = relations.get_interval_relation(self.start, self.end, other.start, other.end, tolerance)
        return RelationResult(state=state, tolerance=tolerance)
