from __future__ import annotations

import datetime as dt

import pytest

from worktime.models import WeekBoundaries, WeekDay

# The fixed clock points at Wednesday 2023-01-04.


@pytest.mark.parametrize(
    "offset, start_day, first, last",
    [
        (0, WeekDay.MONDAY, dt.date(2023, 1, 2), dt.date(2023, 1, 8)),
        (0, WeekDay.WEDNESDAY, dt.date(2023, 1, 4), dt.date(2023, 1, 10)),
        (0, WeekDay.THURSDAY, dt.date(2022, 12, 29), dt.date(2023, 1, 4)),
        (0, WeekDay.SUNDAY, dt.date(2023, 1, 1), dt.date(2023, 1, 7)),
        (-1, WeekDay.MONDAY, dt.date(2022, 12, 26), dt.date(2023, 1, 1)),
        (1, WeekDay.WEDNESDAY, dt.date(2023, 1, 11), dt.date(2023, 1, 17)),
        (2, WeekDay.SATURDAY, dt.date(2023, 1, 14), dt.date(2023, 1, 20)),
    ],
)
def test_week_boundaries(engine, offset, start_day, first, last):
    assert engine.week_boundaries(offset, start_day) == WeekBoundaries(first_day=first, last_day=last)


@pytest.mark.parametrize("start_day", list(WeekDay))
@pytest.mark.parametrize("offset", [-3, 0, 5])
def test_week_contains_shifted_reference(engine, clock, offset, start_day):
    reference = clock.now.date() + dt.timedelta(weeks=offset)
    bounds = engine.week_boundaries(offset, start_day)
    assert bounds.first_day <= reference <= bounds.last_day
    assert bounds.first_day.isoweekday() == start_day
    assert (bounds.last_day - bounds.first_day).days == 6
