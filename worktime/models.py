from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from pathlib import Path


class PrecisionPolicy(str, Enum):
    SECOND = "second"
    MINUTE = "minute"


class DayLengthPolicy(str, Enum):
    HOURS_24 = "hours_24"
    HOURS_8 = "hours_8"

    @property
    def hours(self) -> int:
        return 24 if self is DayLengthPolicy.HOURS_24 else 8


class TimeResolution(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"


class HourStyle(str, Enum):
    HOURS_12 = "hours_12"
    HOURS_24 = "hours_24"


class DateStyle(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class WeekDay(IntEnum):
    """ISO weekday numbers, Monday is 1."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7


class TableKind(str, Enum):
    REPORT = "report"
    RAW = "raw"


class ExportType(str, Enum):
    CSV = "csv"
    XLS = "xls"

    @property
    def suffix(self) -> str:
        return ".csv" if self is ExportType.CSV else ".xlsx"


class ExportData(str, Enum):
    REPORT = "report"
    RAW_DATA = "raw_data"

    @property
    def table_kind(self) -> TableKind:
        return TableKind.REPORT if self is ExportData.REPORT else TableKind.RAW


class CsvSeparator(str, Enum):
    COMMA = ","
    SEMICOLON = ";"
    TAB = "\t"


@dataclass(frozen=True, slots=True)
class Interval:
    """Normalized span of time, ``start`` never after ``end``."""

    start: dt.datetime
    end: dt.datetime

    @property
    def duration(self) -> dt.timedelta:
        return self.end - self.start

    @property
    def duration_ms(self) -> int:
        return self.duration // dt.timedelta(milliseconds=1)


@dataclass(frozen=True, slots=True)
class Period:
    """Decomposition of a duration. ``days`` stays 0 until a day length is applied."""

    hours: int
    minutes: int
    seconds: int
    days: int = 0

    @classmethod
    def from_milliseconds(cls, millis: int) -> "Period":
        total_seconds = millis // 1000
        hours, remainder = divmod(total_seconds, 3600)
        minutes, seconds = divmod(remainder, 60)
        return cls(hours=hours, minutes=minutes, seconds=seconds)

    def split_days(self, day_length: DayLengthPolicy) -> "Period":
        days, hours = divmod(self.hours, day_length.hours)
        if not days:
            return self
        return replace(self, days=self.days + days, hours=hours)


@dataclass(frozen=True, slots=True)
class WeekBoundaries:
    first_day: dt.date
    last_day: dt.date


@dataclass(frozen=True, slots=True)
class ExportRecord:
    """Result of a written export file."""

    export_type: ExportType
    path: Path
    checksum: str
    created_at: dt.datetime


__all__ = [
    "CsvSeparator",
    "DateStyle",
    "DayLengthPolicy",
    "ExportData",
    "ExportRecord",
    "ExportType",
    "HourStyle",
    "Interval",
    "Period",
    "PrecisionPolicy",
    "TableKind",
    "TimeResolution",
    "WeekBoundaries",
    "WeekDay",
]
