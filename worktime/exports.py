from __future__ import annotations

import datetime as dt
import logging
from typing import List, Optional, Sequence, Union

from .config import ReportingConfig, Settings, settings as default_settings
from .durations import DurationEngine, format_clock_time
from .models import DateStyle, HourStyle, PrecisionPolicy, TableKind, TimeResolution
from .schemas import (
    DATA_SHEET,
    REPORT_SHEET,
    ExportTable,
    ExportWorkbook,
    ReportRow,
    TimeRegistration,
)
from .utils import text_or_empty

logger = logging.getLogger(__name__)

Records = Union[Sequence[ReportRow], Sequence[TimeRegistration]]


class ExportTableBuilder:
    """Assembles export tables from report rows and time registrations.

    The builder knows nothing about CSV or spreadsheet files; it only decides
    which headers and cells end up in which table.
    """

    def __init__(
        self,
        engine: Optional[DurationEngine] = None,
        *,
        hour_style: HourStyle = HourStyle.HOURS_24,
        now_marker: Optional[str] = None,
        raw_headers: Optional[Sequence[str]] = None,
    ) -> None:
        self.engine = engine or DurationEngine()
        self.hour_style = hour_style
        self.now_marker = now_marker if now_marker is not None else default_settings.now_marker
        self.raw_headers: List[str] = list(raw_headers or default_settings.raw_header_labels)

    @classmethod
    def from_settings(
        cls,
        source: Settings,
        engine: Optional[DurationEngine] = None,
        config: Optional[ReportingConfig] = None,
    ) -> "ExportTableBuilder":
        config = config or source.reporting_config()
        return cls(
            engine,
            hour_style=config.hour_style,
            now_marker=source.now_marker,
            raw_headers=source.raw_header_labels,
        )

    def _date(self, value: dt.datetime) -> str:
        return self.engine.date_formatter(value, DateStyle.SHORT)

    def _time(self, value: dt.datetime, policy: PrecisionPolicy) -> str:
        return format_clock_time(value, TimeResolution.MEDIUM, self.hour_style, policy)

    def raw_row(self, registration: TimeRegistration, policy: PrecisionPolicy) -> List[str]:
        if registration.end_time is not None:
            end_date = self._date(registration.end_time)
            end_time = self._time(registration.end_time, policy)
        else:
            end_date = self.now_marker
            end_time = ""
        project = registration.task.project
        return [
            self._date(registration.start_time),
            self._time(registration.start_time, policy),
            end_date,
            end_time,
            text_or_empty(registration.comment),
            project.name,
            registration.task.name,
            text_or_empty(project.comment),
        ]

    def raw_table(self, registrations: Sequence[TimeRegistration], policy: PrecisionPolicy) -> ExportTable:
        rows = [self.raw_row(registration, policy) for registration in registrations]
        return ExportTable(headers=list(self.raw_headers), rows=rows)

    def report_table(self, report_rows: Sequence[ReportRow]) -> ExportTable:
        return ExportTable(headers=None, rows=[row.values() for row in report_rows])

    def build_flat_table(self, kind: TableKind, records: Records, policy: PrecisionPolicy) -> ExportTable:
        builders = {
            TableKind.REPORT: lambda: self.report_table(records),  # type: ignore[arg-type]
            TableKind.RAW: lambda: self.raw_table(records, policy),  # type: ignore[arg-type]
        }
        table = builders[kind]()
        logger.debug("Built %s table with %d rows", kind, len(table.rows))
        return table

    def build_workbook(
        self,
        report_rows: Sequence[ReportRow],
        registrations: Sequence[TimeRegistration],
        policy: PrecisionPolicy,
    ) -> ExportWorkbook:
        if report_rows:
            # The first report row becomes the header and is not repeated as data.
            report = ExportTable(
                headers=report_rows[0].values(),
                rows=[row.values() for row in report_rows[1:]],
            )
        else:
            report = ExportTable(headers=None, rows=[])
        data = self.raw_table(registrations, policy)
        logger.debug("Built workbook: %d report rows, %d data rows", len(report.rows), len(data.rows))
        return ExportWorkbook(sheets={REPORT_SHEET: report, DATA_SHEET: data})


__all__ = ["ExportTableBuilder"]
