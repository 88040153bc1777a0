from __future__ import annotations

from pathlib import Path
from typing import Any, List

from typing_extensions import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .models import (
    CsvSeparator,
    DayLengthPolicy,
    ExportData,
    ExportType,
    HourStyle,
    PrecisionPolicy,
    WeekDay,
)

DEFAULT_RAW_HEADER_LABELS: List[str] = [
    "Start date",
    "Start time",
    "End date",
    "End time",
    "Comment",
    "Project",
    "Task",
    "Project comment",
]


class ReportingConfig(BaseModel):
    """Configuration bundle handed to every engine and builder call."""

    model_config = ConfigDict(frozen=True)

    precision: PrecisionPolicy = PrecisionPolicy.SECOND
    day_length: DayLengthPolicy = DayLengthPolicy.HOURS_24
    week_start: WeekDay = WeekDay.MONDAY
    hour_style: HourStyle = HourStyle.HOURS_24


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="WORKTIME_", env_file=".env", case_sensitive=False, extra="ignore")
    """Reporting and export defaults."""

    app_name: str = "WorkTime"

    time_precision: PrecisionPolicy = PrecisionPolicy.SECOND
    display_duration: DayLengthPolicy = DayLengthPolicy.HOURS_24
    week_starts_on: WeekDay = WeekDay.MONDAY
    hour_format: HourStyle = HourStyle.HOURS_24

    now_marker: str = "Now"
    raw_header_labels: Annotated[List[str], NoDecode] = Field(default_factory=lambda: list(DEFAULT_RAW_HEADER_LABELS))

    label_hours: str = "hours"
    label_minutes: str = "minutes"
    label_seconds: str = "seconds"
    label_days_short: str = "d"
    label_hours_short: str = "h"
    label_minutes_short: str = "m"
    label_seconds_short: str = "s"

    export_dir: Path = Path("./data/exports")
    export_filename: str = "worktime-export"
    export_type: ExportType = ExportType.CSV
    export_csv_separator: CsvSeparator = CsvSeparator.SEMICOLON
    export_data: ExportData = ExportData.REPORT

    @field_validator(
        "time_precision",
        "display_duration",
        "hour_format",
        "export_type",
        "export_csv_separator",
        "export_data",
        mode="before",
    )
    @classmethod
    def _enum_by_name(cls, value: Any, info: ValidationInfo) -> Any:
        if not isinstance(value, str):
            return value
        enum_type = cls.model_fields[info.field_name].annotation
        member = enum_type.__members__.get(value.strip().upper())
        return member if member is not None else value

    @field_validator("week_starts_on", mode="before")
    @classmethod
    def _week_day_by_name(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        text = value.strip()
        if text.isdigit():
            return int(text)
        member = WeekDay.__members__.get(text.upper())
        return member if member is not None else value

    @field_validator("raw_header_labels", mode="before")
    @classmethod
    def _split_header_labels(cls, value: str | List[str]) -> List[str]:
        if isinstance(value, list):
            return value
        if not value:
            return list(DEFAULT_RAW_HEADER_LABELS)
        return [label.strip() for label in value.split(",")]

    @field_validator("raw_header_labels")
    @classmethod
    def _require_eight_labels(cls, value: List[str]) -> List[str]:
        if len(value) != len(DEFAULT_RAW_HEADER_LABELS):
            raise ValueError(f"expected {len(DEFAULT_RAW_HEADER_LABELS)} raw header labels, got {len(value)}")
        return value

    def reporting_config(self) -> ReportingConfig:
        return ReportingConfig(
            precision=self.time_precision,
            day_length=self.display_duration,
            week_start=self.week_starts_on,
            hour_style=self.hour_format,
        )


settings = Settings()
