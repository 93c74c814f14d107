# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_interval

from typing import Optional

EMPTY_START_TIME_MESSAGE = "start time must not be empty"
EMPTY_END_TIME_MESSAGE = "end time must not be empty"


class IntervalError(ValueError):
    """Base class for every error raised by coreason_interval."""


class MissingStartTimeError(IntervalError):
    """Raised by TimeInterval.create when no start time is supplied."""

    def __init__(self, message: str = EMPTY_START_TIME_MESSAGE) -> None:
        super().__init__(message)


class MissingEndTimeError(IntervalError):
    """Raised by TimeInterval.create when no end time is supplied."""

    def __init__(self, message: str = EMPTY_END_TIME_MESSAGE) -> None:
        super().__init__(message)


class ParseFailureError(IntervalError):
    """
    Raised when a timestamp or tolerance string cannot be parsed.

    Kept separate from the missing-time errors: those mean a value was absent,
    this one means a value was present but unreadable.

    Attributes:
        value: The input string that failed to parse.
        pattern: The format pattern in use, if any.
    """

    def __init__(self, value: str, pattern: Optional[str] = None, reason: Optional[str] = None) -> None:
        self.value = value
        self.pattern = pattern
        message = f"Could not parse '{value}'"
        if pattern is not None:
            message += f" with pattern '{pattern}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)
