from __future__ import annotations

import csv
import datetime as dt
import hashlib
import logging
from pathlib import Path
from typing import Any, Optional, Sequence

from openpyxl import Workbook
from openpyxl.utils.exceptions import InvalidFileException
from pydantic import BaseModel, Field

from .config import Settings, settings as default_settings
from .exports import ExportTableBuilder
from .models import CsvSeparator, ExportData, ExportRecord, ExportType, PrecisionPolicy
from .schemas import DATA_SHEET, REPORT_SHEET, ExportTable, ExportWorkbook, ReportRow, TimeRegistration

logger = logging.getLogger(__name__)

MIN_FILENAME_LENGTH = 3
SHEET_ORDER = (REPORT_SHEET, DATA_SHEET)
FILENAME_SEPARATORS = ("/", "\\")


class GeneralExportError(RuntimeError):
    """Writing an export file failed."""

    def __init__(self, message: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class InvalidExportRequest(ValueError):
    """The export request cannot be fulfilled as given."""


def write_csv(table: ExportTable, path: Path, separator: CsvSeparator = CsvSeparator.SEMICOLON) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle, delimiter=separator.value)
            if table.headers is not None:
                writer.writerow(table.headers)
            writer.writerows(table.rows)
    except OSError as exc:
        logger.exception("Writing CSV export to %s failed", path)
        raise GeneralExportError(f"Could not write CSV export to {path}", cause=exc) from exc
    logger.info("CSV export written to %s (%d rows)", path, len(table.rows))
    return path


def _sheet_names(workbook: ExportWorkbook) -> Sequence[str]:
    names = [name for name in SHEET_ORDER if name in workbook.sheets]
    names.extend(name for name in workbook.sheets if name not in SHEET_ORDER)
    return names


def write_workbook(workbook: ExportWorkbook, path: Path) -> Path:
    try:
        wb = Workbook()
        wb.remove(wb.active)
        for name in _sheet_names(workbook):
            table = workbook.sheets[name]
            ws = wb.create_sheet(title=name)
            if table.headers is not None:
                ws.append(table.headers)
            for row in table.rows:
                ws.append(row)
        path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(path)
    except (OSError, ValueError, InvalidFileException) as exc:
        # IllegalCharacterError is a ValueError
        logger.exception("Writing workbook export to %s failed", path)
        raise GeneralExportError(f"Could not write workbook export to {path}", cause=exc) from exc
    logger.info("Workbook export written to %s (%s)", path, ", ".join(wb.sheetnames))
    return path


def _checksum_file(path: Path) -> str:
    digest = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            digest.update(chunk)
    return digest.hexdigest()


class ExportRequest(BaseModel):
    filename: str = Field(default_factory=lambda: default_settings.export_filename)
    export_type: ExportType = Field(default_factory=lambda: default_settings.export_type)
    separator: CsvSeparator = Field(default_factory=lambda: default_settings.export_csv_separator)
    data: ExportData = Field(default_factory=lambda: default_settings.export_data)
    precision: PrecisionPolicy = Field(default_factory=lambda: default_settings.time_precision)


class ExportService:
    """Builds the export tables and hands them to the matching writer."""

    def __init__(self, builder: ExportTableBuilder, settings: Optional[Settings] = None) -> None:
        self.builder = builder
        self.settings = settings or default_settings

    def request(self, **overrides: Any) -> ExportRequest:
        """An ``ExportRequest`` defaulted from this service's settings."""
        values = {
            "filename": self.settings.export_filename,
            "export_type": self.settings.export_type,
            "separator": self.settings.export_csv_separator,
            "data": self.settings.export_data,
            "precision": self.settings.time_precision,
        }
        values.update(overrides)
        return ExportRequest(**values)

    def target_path(self, request: ExportRequest) -> Path:
        return self.settings.export_dir / f"{request.filename.strip()}{request.export_type.suffix}"

    def export(
        self,
        request: ExportRequest,
        report_rows: Sequence[ReportRow],
        registrations: Sequence[TimeRegistration],
    ) -> ExportRecord:
        filename = request.filename.strip()
        if len(filename) < MIN_FILENAME_LENGTH:
            raise InvalidExportRequest(
                f"Export file name must contain at least {MIN_FILENAME_LENGTH} characters"
            )
        if any(separator in filename for separator in FILENAME_SEPARATORS):
            raise InvalidExportRequest(f"Export file name must not contain a path: {filename!r}")

        path = self.target_path(request)
        logger.debug("Starting %s export to %s", request.export_type.value, path)
        if request.export_type is ExportType.CSV:
            records = report_rows if request.data is ExportData.REPORT else registrations
            table = self.builder.build_flat_table(request.data.table_kind, records, request.precision)
            write_csv(table, path, request.separator)
        else:
            workbook = self.builder.build_workbook(report_rows, registrations, request.precision)
            write_workbook(workbook, path)

        try:
            checksum = _checksum_file(path)
        except OSError as exc:
            raise GeneralExportError(f"Could not read back export {path}", cause=exc) from exc
        return ExportRecord(
            export_type=request.export_type,
            path=path,
            checksum=checksum,
            created_at=self.builder.engine.clock(),
        )


__all__ = [
    "ExportRequest",
    "ExportService",
    "GeneralExportError",
    "InvalidExportRequest",
    "write_csv",
    "write_workbook",
]
