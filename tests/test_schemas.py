from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from coreason_interval.relations import RelationState
from coreason_interval.schemas import MISSING_INTERVAL_MESSAGE, IntervalSummary, RelationResult


class TestRelationResult:
    def test_ok(self) -> None:
        result = RelationResult(state=RelationState.OVERLAPS, tolerance=timedelta(0))
        assert result.ok
        assert result.error is None

    def test_missing_interval(self) -> None:
        result = RelationResult(
            state=RelationState.UNKNOWN, tolerance=timedelta(hours=1), error=MISSING_INTERVAL_MESSAGE
        )
        assert not result.ok

    def test_json_dump(self) -> None:
        result = RelationResult(state=RelationState.MEETS, tolerance=timedelta(days=1))
        data = result.model_dump(mode="json")
        assert data["state"] == "MEETS"
        assert data["error"] is None
        assert RelationResult.model_validate_json(result.model_dump_json()) == result

    def test_frozen(self) -> None:
        result = RelationResult(state=RelationState.MEETS, tolerance=timedelta(0))
        with pytest.raises(ValidationError):
            result.state = RelationState.EQUALS  # type: ignore[misc]

    def test_invalid_state(self) -> None:
        with pytest.raises(ValidationError):
            RelationResult(state="SOMETIMES", tolerance=timedelta(0))


class TestIntervalSummary:
    def test_json_dump(self) -> None:
        summary = IntervalSummary(
            start=datetime(2014, 5, 3, tzinfo=timezone.utc),
            end=datetime(2014, 5, 4, tzinfo=timezone.utc),
            duration=timedelta(days=1),
            reversed=False,
        )
        data = summary.model_dump(mode="json")
        assert data["start"].startswith("2014-05-03T00:00:00")
        assert data["reversed"] is False
