# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_interval

import json
import sys
from datetime import timedelta
from typing import Optional

import click
from dateutil import tz

from coreason_interval.exceptions import IntervalError
from coreason_interval.interval import DEFAULT_FORMAT, TimeInterval
from coreason_interval.parser import parse_interval, parse_tolerance
from coreason_interval.relations import RelationState
from coreason_interval.utils.logger import logger


def _load_intervals(
    start_a: str, end_a: str, start_b: str, end_b: str, pattern: Optional[str], tolerance: str
) -> tuple[TimeInterval, TimeInterval, timedelta]:
    try:
        interval_a = parse_interval(start_a, end_a, pattern)
        interval_b = parse_interval(start_b, end_b, pattern)
        tolerance_delta = parse_tolerance(tolerance)
    except IntervalError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    return interval_a, interval_b, tolerance_delta


@click.group()
def cli() -> None:
    """Coreason Interval: Allen Interval Algebra CLI"""
    pass


@cli.command()
@click.argument("start_a")
@click.argument("end_a")
@click.argument("start_b")
@click.argument("end_b")
@click.option("--tolerance", "-t", default="0", help="Gap that still counts as MEETS (e.g. 24h, 30m). Default: 0.")
@click.option("--pattern", "-p", help="strptime pattern for all four timestamps. Defaults to free-form parsing.")
def relate(start_a: str, end_a: str, start_b: str, end_b: str, tolerance: str, pattern: Optional[str]) -> None:
    """
    Classify the relation of interval A [START_A, END_A] to interval B [START_B, END_B].
    """
    interval_a, interval_b, tolerance_delta = _load_intervals(start_a, end_a, start_b, end_b, pattern, tolerance)

    logger.info(f"Relating {interval_a} to {interval_b} (tolerance {tolerance_delta})")
    result = interval_a.relation(interval_b, tolerance_delta)

    click.echo(json.dumps(result.model_dump(mode="json"), indent=2))


@cli.command()
@click.argument("relation", type=click.Choice([s.value for s in RelationState if s is not RelationState.UNKNOWN]))
@click.argument("start_a")
@click.argument("end_a")
@click.argument("start_b")
@click.argument("end_b")
@click.option("--tolerance", "-t", default="0", help="Gap used by the adjacency relations. Default: 0.")
@click.option("--pattern", "-p", help="strptime pattern for all four timestamps.")
def check(
    relation: str, start_a: str, end_a: str, start_b: str, end_b: str, tolerance: str, pattern: Optional[str]
) -> None:
    """
    Check whether a single RELATION holds between interval A and interval B.
    """
    interval_a, interval_b, tolerance_delta = _load_intervals(start_a, end_a, start_b, end_b, pattern, tolerance)

    state = RelationState(relation)
    holds = interval_a.holds(state, interval_b, tolerance_delta)

    click.echo(json.dumps({"relation": state.value, "holds": holds}, indent=2))


@cli.command()
@click.argument("start")
@click.argument("end")
@click.option("--pattern", "-p", help="strptime pattern for both timestamps.")
@click.option("--format", "-f", "output_format", default=DEFAULT_FORMAT, help="strftime pattern for display.")
@click.option("--display-tz", "-z", help="Zone to display the interval in (e.g. 'Europe/Berlin', 'UTC').")
def show(start: str, end: str, pattern: Optional[str], output_format: str, display_tz: Optional[str]) -> None:
    """
    Print an interval [START, END] with its duration.
    """
    try:
        interval = parse_interval(start, end, pattern)
    except IntervalError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    zone = None
    if display_tz:
        zone = tz.gettz(display_tz)
        if zone is None:
            click.echo(f"Error: Unknown timezone '{display_tz}'", err=True)
            sys.exit(1)

    if interval.is_reversed:
        logger.warning(f"Interval {interval} starts after it ends")

    click.echo(interval.format(output_format, tz=zone))
    click.echo(json.dumps(interval.summary().model_dump(mode="json"), indent=2))


if __name__ == "__main__":
    cli()  # pragma: no cover
