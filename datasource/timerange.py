from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Iterator

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"
LAST_INSTANT = datetime.max.replace(tzinfo=timezone.utc)


class TimestampParseError(ValueError):
    """Raised when a range boundary does not match ``TIMESTAMP_FORMAT``."""

    def __init__(self, field: str, value: object) -> None:
        super().__init__(f"{field}: cannot parse timestamp {value!r}")
        self.field = field
        self.value = value


@dataclass(frozen=True)
class TimeRange:
    start: datetime
    end: datetime


def parse_timestamp(value: str, tz: tzinfo, field: str = "timestamp") -> datetime:
    """Parse ``2023-01-01T00:00:00.000000+01:00`` into an instant shown in ``tz``.

    The fraction may have 1-6 digits and the offset may be ``Z``. Naive
    strings and strings without a fraction are rejected.
    """
    try:
        parsed = datetime.strptime(value, TIMESTAMP_FORMAT)
    except (TypeError, ValueError) as exc:
        raise TimestampParseError(field, value) from exc
    return parsed.astimezone(tz)


def parse_range(start: str, end: str, tz: tzinfo) -> TimeRange:
    return TimeRange(
        start=parse_timestamp(start, tz, field="range.from"),
        end=parse_timestamp(end, tz, field="range.to"),
    )


def hours(count: int) -> timedelta:
    return timedelta(hours=count)


def step_label(count: int) -> str:
    """ISO-8601 duration label for an hour step, e.g. ``PT3H``."""
    return f"PT{count}H"


def epoch_millis(point: datetime) -> int:
    # whole seconds only; the fraction is dropped
    return calendar.timegm(point.utctimetuple()) * 1000


@dataclass(frozen=True)
class TimePoints:
    """Points ``start, start + step, ...`` up to and including ``end + step``.

    Iterating again starts over. Steps are taken on the UTC timeline and each
    point is converted back to the zone of ``start``, so consecutive points
    are exactly ``step`` apart even across DST changes.
    """

    start: datetime
    end: datetime
    step: timedelta

    def __post_init__(self) -> None:
        if self.step <= timedelta(0):
            raise ValueError(f"step must be positive, got {self.step}")

    def __iter__(self) -> Iterator[datetime]:
        if self.start > self.end:
            return
        tz = self.start.tzinfo
        point = self.start.astimezone(timezone.utc)
        try:
            limit = self.end.astimezone(timezone.utc) + self.step
        except OverflowError:
            limit = LAST_INSTANT
        # points past year 9999 cannot be represented; the series ends there
        while point <= limit:
            try:
                local = point.astimezone(tz)
            except OverflowError:
                return
            yield local
            try:
                point += self.step
            except OverflowError:
                return

    @classmethod
    def over(cls, time_range: TimeRange, step: timedelta) -> TimePoints:
        return cls(time_range.start, time_range.end, step)
