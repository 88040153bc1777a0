"""Duration computation and export-table generation for time registrations."""

from .config import ReportingConfig, Settings, settings
from .durations import (
    DurationEngine,
    DurationLabels,
    compute_duration,
    compute_interval,
    compute_period,
    format_clock_time,
    normalize,
    split_days,
)
from .exports import ExportTableBuilder
from .models import (
    CsvSeparator,
    DateStyle,
    DayLengthPolicy,
    ExportData,
    ExportRecord,
    ExportType,
    HourStyle,
    Interval,
    Period,
    PrecisionPolicy,
    TableKind,
    TimeResolution,
    WeekBoundaries,
    WeekDay,
)
from .schemas import ExportTable, ExportWorkbook, Project, ReportRow, Task, TimeRegistration
from .writers import (
    ExportRequest,
    ExportService,
    GeneralExportError,
    InvalidExportRequest,
    write_csv,
    write_workbook,
)

__all__ = [
    "CsvSeparator",
    "DateStyle",
    "DayLengthPolicy",
    "DurationEngine",
    "DurationLabels",
    "ExportData",
    "ExportRecord",
    "ExportRequest",
    "ExportService",
    "ExportTable",
    "ExportTableBuilder",
    "ExportType",
    "ExportWorkbook",
    "GeneralExportError",
    "HourStyle",
    "Interval",
    "InvalidExportRequest",
    "Period",
    "PrecisionPolicy",
    "Project",
    "ReportRow",
    "ReportingConfig",
    "Settings",
    "TableKind",
    "Task",
    "TimeRegistration",
    "TimeResolution",
    "WeekBoundaries",
    "WeekDay",
    "compute_duration",
    "compute_interval",
    "compute_period",
    "format_clock_time",
    "normalize",
    "settings",
    "split_days",
    "write_csv",
    "write_workbook",
]
