# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_interval

from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel, ConfigDict

from coreason_interval.relations import RelationState

MISSING_INTERVAL_MESSAGE = "missing interval: no relation"


class RelationResult(BaseModel):
    """
    Represents the outcome of classifying two intervals.

    Attributes:
        state: The relation of the receiver to the other interval.
        tolerance: The adjacency tolerance used for the classification.
        error: Set when no classification was possible (e.g. the other interval is missing).
    """

    model_config = ConfigDict(frozen=True)

    state: RelationState
    tolerance: timedelta
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class IntervalSummary(BaseModel):
    """
    Serializable view of a TimeInterval.

    Attributes:
        start: Start time as supplied.
        end: End time as supplied.
        duration: end - start on the absolute instant (negative when reversed).
        reversed: True when start is after end.
    """

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime
    duration: timedelta
    reversed: bool
