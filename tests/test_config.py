from __future__ import annotations

import pytest
from pydantic import ValidationError

from worktime.config import DEFAULT_RAW_HEADER_LABELS, ReportingConfig, Settings
from worktime.models import (
    CsvSeparator,
    DayLengthPolicy,
    ExportData,
    ExportType,
    HourStyle,
    PrecisionPolicy,
    WeekDay,
)


def test_defaults() -> None:
    config = Settings(_env_file=None)
    assert config.time_precision is PrecisionPolicy.SECOND
    assert config.display_duration is DayLengthPolicy.HOURS_24
    assert config.week_starts_on is WeekDay.MONDAY
    assert config.raw_header_labels == DEFAULT_RAW_HEADER_LABELS
    assert config.export_csv_separator is CsvSeparator.SEMICOLON


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("WORKTIME_TIME_PRECISION", "minute")
    monkeypatch.setenv("WORKTIME_DISPLAY_DURATION", "HOURS_8")
    monkeypatch.setenv("WORKTIME_WEEK_STARTS_ON", "sunday")
    monkeypatch.setenv("WORKTIME_HOUR_FORMAT", "hours_12")
    monkeypatch.setenv("WORKTIME_EXPORT_TYPE", "xls")
    monkeypatch.setenv("WORKTIME_EXPORT_CSV_SEPARATOR", "comma")
    monkeypatch.setenv("WORKTIME_EXPORT_DATA", "RAW_DATA")
    monkeypatch.setenv("WORKTIME_NOW_MARKER", "Nu")
    config = Settings(_env_file=None)

    assert config.time_precision is PrecisionPolicy.MINUTE
    assert config.display_duration is DayLengthPolicy.HOURS_8
    assert config.week_starts_on is WeekDay.SUNDAY
    assert config.hour_format is HourStyle.HOURS_12
    assert config.export_type is ExportType.XLS
    assert config.export_csv_separator is CsvSeparator.COMMA
    assert config.export_data is ExportData.RAW_DATA
    assert config.now_marker == "Nu"


def test_week_start_accepts_iso_number(monkeypatch) -> None:
    monkeypatch.setenv("WORKTIME_WEEK_STARTS_ON", "3")
    assert Settings(_env_file=None).week_starts_on is WeekDay.WEDNESDAY


def test_header_labels_are_split_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("WORKTIME_RAW_HEADER_LABELS", "Von, Zeit,Bis,Zeit,Notiz,Projekt,Aufgabe,Projektnotiz")
    config = Settings(_env_file=None)
    assert config.raw_header_labels[:2] == ["Von", "Zeit"]
    assert len(config.raw_header_labels) == 8


def test_header_labels_need_eight_entries() -> None:
    with pytest.raises(ValidationError):
        Settings(raw_header_labels=["only", "two"], _env_file=None)


def test_reporting_config_bundle() -> None:
    config = Settings(time_precision="MINUTE", display_duration="hours_8", _env_file=None)
    bundle = config.reporting_config()
    assert bundle == ReportingConfig(
        precision=PrecisionPolicy.MINUTE,
        day_length=DayLengthPolicy.HOURS_8,
        week_start=WeekDay.MONDAY,
        hour_style=HourStyle.HOURS_24,
    )
    with pytest.raises(ValidationError):
        bundle.precision = PrecisionPolicy.SECOND  # type: ignore[misc]
