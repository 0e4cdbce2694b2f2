"""Synthetic series and annotations for the simple-JSON endpoints."""

from __future__ import annotations

import math
import random
from typing import Callable, Optional

from .schemas import AnnotationMeta, AnnotationOut, Number, QueryOut, SearchResult, Target
from .timerange import TimePoints, TimeRange, epoch_millis, hours, step_label

QUERY_STEP_HOURS = 1
CONSTANT_TARGET_LIMIT = 50
RANDOM_MIN = 0
RANDOM_MAX = 100

ANNOTATION_DATASOURCE = "mock datasource"
ANNOTATION_TEXT = "mock annotation"

SEARCH_TARGETS = [10, 25, 50, 75]


def numeric_target(target: Target) -> Optional[Number]:
    """The number a target stands for, or None for names like ``"A"``."""
    if not isinstance(target, str):
        return target
    try:
        return int(target)
    except ValueError:
        pass
    try:
        number = float(target)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def datapoint_value(target: Target, randint: Callable[[int, int], int] = random.randint) -> Number:
    """Targets up to 50 are repeated as the value; anything larger or non-numeric yields noise in [0, 100]."""
    number = numeric_target(target)
    if number is not None and number <= CONSTANT_TARGET_LIMIT:
        return number
    return randint(RANDOM_MIN, RANDOM_MAX)


def query_series(
    time_range: TimeRange,
    target: Target,
    randint: Callable[[int, int], int] = random.randint,
) -> QueryOut:
    points = TimePoints.over(time_range, hours(QUERY_STEP_HOURS))
    datapoints = [(datapoint_value(target, randint), epoch_millis(p)) for p in points]
    return QueryOut(target=target, datapoints=datapoints)


def annotations(time_range: TimeRange, step_hours: int) -> list[AnnotationOut]:
    label = step_label(step_hours)
    meta = AnnotationMeta(name=label, enabled=True, datasource=ANNOTATION_DATASOURCE, showLine=True)
    return [
        AnnotationOut(
            annotation=meta,
            title=f"H {point.hour}",
            time=epoch_millis(point),
            text=ANNOTATION_TEXT,
        )
        for point in TimePoints.over(time_range, hours(step_hours))
    ]


def search_targets() -> list[SearchResult]:
    results = []
    for value in SEARCH_TARGETS:
        kind = "constant" if value <= CONSTANT_TARGET_LIMIT else "random"
        results.append(SearchResult(text=f"{kind} {value}", value=value))
    return results
