"""Elapsed-time arithmetic and duration rendering for time registrations."""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .config import Settings, settings as default_settings
from .models import (
    DateStyle,
    DayLengthPolicy,
    HourStyle,
    Interval,
    Period,
    PrecisionPolicy,
    TimeResolution,
    WeekBoundaries,
    WeekDay,
)
from .schemas import TimeRegistration
from .utils import Clock, DateFormatter, align_to, format_date, system_clock

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Pure interval arithmetic
# ----------------------------------------------------------------------
def _truncate_to_second(value: dt.datetime) -> dt.datetime:
    return value.replace(microsecond=0)


def _truncate_to_minute(value: dt.datetime) -> dt.datetime:
    return value.replace(second=0, microsecond=0)


_NORMALIZERS: Dict[PrecisionPolicy, Callable[[dt.datetime], dt.datetime]] = {
    PrecisionPolicy.SECOND: _truncate_to_second,
    PrecisionPolicy.MINUTE: _truncate_to_minute,
}


def normalize(instant: dt.datetime, policy: PrecisionPolicy) -> dt.datetime:
    """Drop the components finer than ``policy``; sub-second parts always go."""
    return _NORMALIZERS[policy](instant)


def compute_interval(start: dt.datetime, end: dt.datetime, policy: PrecisionPolicy) -> Interval:
    """Normalize both instants and swap them when ``end`` lies before ``start``."""
    start = normalize(start, policy)
    end = normalize(end, policy)
    if end < start:
        start, end = end, start
    return Interval(start=start, end=end)


def compute_duration(start: dt.datetime, end: dt.datetime, policy: PrecisionPolicy) -> int:
    """Elapsed milliseconds between the normalized instants."""
    return compute_interval(start, end, policy).duration_ms


def split_days(period: Period, day_length: DayLengthPolicy) -> Period:
    return period.split_days(day_length)


def compute_period(
    start: dt.datetime,
    end: dt.datetime,
    policy: PrecisionPolicy,
    day_length: Optional[DayLengthPolicy] = None,
) -> Period:
    period = Period.from_milliseconds(compute_duration(start, end, policy))
    if day_length is None:
        return period
    return split_days(period, day_length)


# ----------------------------------------------------------------------
# Rendering helpers
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class DurationLabels:
    hours: str = "hours"
    minutes: str = "minutes"
    seconds: str = "seconds"
    days_short: str = "d"
    hours_short: str = "h"
    minutes_short: str = "m"
    seconds_short: str = "s"

    @classmethod
    def from_settings(cls, source: Settings) -> "DurationLabels":
        return cls(
            hours=source.label_hours,
            minutes=source.label_minutes,
            seconds=source.label_seconds,
            days_short=source.label_days_short,
            hours_short=source.label_hours_short,
            minutes_short=source.label_minutes_short,
            seconds_short=source.label_seconds_short,
        )


def _collapse(groups: Sequence[Tuple[int, str]], separator: str) -> str:
    # Leading zero groups are dropped; the smallest group is always shown.
    for index, (value, _) in enumerate(groups[:-1]):
        if value > 0:
            return separator.join(text for _, text in groups[index:])
    return groups[-1][1]


def _long_seconds(period: Period, labels: DurationLabels) -> str:
    return _collapse(
        [
            (period.hours, f"{period.hours} {labels.hours}"),
            (period.minutes, f"{period.minutes} {labels.minutes}"),
            (period.seconds, f"{period.seconds} {labels.seconds}"),
        ],
        ", ",
    )


def _long_minutes(period: Period, labels: DurationLabels) -> str:
    return _collapse(
        [
            (period.hours, f"{period.hours} {labels.hours}"),
            (period.minutes, f"{period.minutes} {labels.minutes}"),
        ],
        ", ",
    )


def _short_groups(period: Period, labels: DurationLabels) -> List[Tuple[int, str]]:
    return [
        (period.days, f"{period.days:02d}{labels.days_short}"),
        (period.hours, f"{period.hours:02d}{labels.hours_short}"),
        (period.minutes, f"{period.minutes:02d}{labels.minutes_short}"),
    ]


def _short_seconds(period: Period, labels: DurationLabels) -> str:
    groups = _short_groups(period, labels)
    groups.append((period.seconds, f"{period.seconds:02d}{labels.seconds_short}"))
    return _collapse(groups, " ")


def _short_minutes(period: Period, labels: DurationLabels) -> str:
    return _collapse(_short_groups(period, labels), " ")


_LONG_FORMATS = {
    PrecisionPolicy.SECOND: _long_seconds,
    PrecisionPolicy.MINUTE: _long_minutes,
}

_SHORT_FORMATS = {
    PrecisionPolicy.SECOND: _short_seconds,
    PrecisionPolicy.MINUTE: _short_minutes,
}

_SHOW_SECONDS = {
    (TimeResolution.SHORT, PrecisionPolicy.SECOND): False,
    (TimeResolution.SHORT, PrecisionPolicy.MINUTE): False,
    (TimeResolution.MEDIUM, PrecisionPolicy.SECOND): True,
    (TimeResolution.MEDIUM, PrecisionPolicy.MINUTE): False,
}


def _clock_24(instant: dt.datetime, show_seconds: bool) -> str:
    text = f"{instant.hour:02d}:{instant.minute:02d}"
    if show_seconds:
        text += f":{instant.second:02d}"
    return text


def _clock_12(instant: dt.datetime, show_seconds: bool) -> str:
    hour = instant.hour % 12 or 12
    text = f"{hour:02d}:{instant.minute:02d}"
    if show_seconds:
        text += f":{instant.second:02d}"
    marker = "AM" if instant.hour < 12 else "PM"
    return f"{text} {marker}"


_CLOCK_RENDERERS = {
    HourStyle.HOURS_24: _clock_24,
    HourStyle.HOURS_12: _clock_12,
}


def format_clock_time(
    instant: dt.datetime,
    resolution: TimeResolution,
    hour_style: HourStyle,
    policy: PrecisionPolicy = PrecisionPolicy.SECOND,
) -> str:
    """Render the wall-clock part of ``instant``.

    Seconds only appear for ``MEDIUM`` resolution under ``SECOND`` precision.
    The 12-hour style appends an ``AM``/``PM`` marker.
    """
    show_seconds = _SHOW_SECONDS[(resolution, policy)]
    return _CLOCK_RENDERERS[hour_style](instant, show_seconds)


class DurationEngine:
    """Duration rendering bound to a clock and a set of unit labels.

    Every call receives its precision and day-length policies explicitly; the
    engine itself holds no preferences. The clock is only consulted for
    ongoing registrations and week calculations.
    """

    def __init__(
        self,
        clock: Clock = system_clock,
        labels: Optional[DurationLabels] = None,
        date_formatter: DateFormatter = format_date,
    ) -> None:
        self.clock = clock
        self.labels = labels or DurationLabels.from_settings(default_settings)
        self.date_formatter = date_formatter

    def _end_of(self, registration: TimeRegistration) -> dt.datetime:
        if registration.end_time is not None:
            return registration.end_time
        return align_to(self.clock(), registration.start_time)

    def registration_duration(self, registration: TimeRegistration, policy: PrecisionPolicy) -> int:
        return compute_duration(registration.start_time, self._end_of(registration), policy)

    def format_single(self, registration: TimeRegistration, policy: PrecisionPolicy) -> str:
        period = compute_period(registration.start_time, self._end_of(registration), policy)
        return _LONG_FORMATS[policy](period, self.labels)

    def format_aggregate(
        self,
        registrations: Iterable[TimeRegistration],
        policy: PrecisionPolicy,
        day_length: DayLengthPolicy,
    ) -> str:
        registrations = list(registrations)
        logger.debug("Calculating period for %d registrations", len(registrations))
        total = 0
        for registration in registrations:
            millis = self.registration_duration(registration, policy)
            logger.debug("Registration duration: %d ms", millis)
            total += millis
        period = Period.from_milliseconds(total).split_days(day_length)
        logger.debug(
            "Total duration %d ms: %dd %dh %dm %ds",
            total,
            period.days,
            period.hours,
            period.minutes,
            period.seconds,
        )
        return _SHORT_FORMATS[policy](period, self.labels)

    def format_date_time(
        self,
        instant: dt.datetime,
        date_style: DateStyle,
        resolution: TimeResolution,
        hour_style: HourStyle,
        policy: PrecisionPolicy = PrecisionPolicy.SECOND,
    ) -> str:
        return f"{self.date_formatter(instant, date_style)} {format_clock_time(instant, resolution, hour_style, policy)}"

    def week_boundaries(self, week_offset: int, week_start_day: WeekDay) -> WeekBoundaries:
        """First and last day of the week ``week_offset`` weeks away from today.

        The week containing the shifted reference day is selected, so a start
        day that would land after the reference falls back one week.
        """
        reference = self.clock().date() + dt.timedelta(weeks=week_offset)
        first_day = reference + dt.timedelta(days=int(week_start_day) - reference.isoweekday())
        if first_day > reference:
            first_day -= dt.timedelta(weeks=1)
        return WeekBoundaries(first_day=first_day, last_day=first_day + dt.timedelta(days=6))


__all__ = [
    "DurationEngine",
    "DurationLabels",
    "compute_duration",
    "compute_interval",
    "compute_period",
    "format_clock_time",
    "normalize",
    "split_days",
]
