from __future__ import annotations

import datetime as dt
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator, model_validator

REPORT_SHEET = "Report"
DATA_SHEET = "Data"


class Project(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)
    name: str
    comment: Optional[str] = None


class Task(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)
    name: str
    project: Project


class TimeRegistration(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)
    start_time: dt.datetime
    end_time: Optional[dt.datetime] = None
    comment: Optional[str] = None
    task: Task

    @property
    def is_ongoing(self) -> bool:
        return self.end_time is None


class ReportRow(BaseModel):
    """Pre-aggregated report line, tabulated as-is."""

    model_config = ConfigDict(frozen=True, from_attributes=True)
    column1: str = ""
    column2: str = ""
    column3: str = ""
    column_total: str = ""

    def values(self) -> List[str]:
        return [self.column1, self.column2, self.column3, self.column_total]


class ExportTable(BaseModel):
    """Header row plus value rows; cells are stored as tuples and cannot change."""

    model_config = ConfigDict(frozen=True)
    headers: Optional[Tuple[str, ...]] = None
    rows: Tuple[Tuple[str, ...], ...] = ()

    @model_validator(mode="after")
    def _check_row_width(self) -> "ExportTable":
        if self.headers is None:
            return self
        width = len(self.headers)
        for index, row in enumerate(self.rows):
            if len(row) != width:
                raise ValueError(f"row {index} has {len(row)} cells, expected {width}")
        return self


class ExportWorkbook(BaseModel):
    model_config = ConfigDict(frozen=True)
    sheets: Mapping[str, ExportTable]

    @field_validator("sheets", mode="after")
    @classmethod
    def _read_only_sheets(cls, value: Mapping[str, ExportTable]) -> Mapping[str, ExportTable]:
        return MappingProxyType(dict(value))

    @field_serializer("sheets")
    def _serialize_sheets(self, value: Mapping[str, ExportTable]) -> Dict[str, ExportTable]:
        return dict(value)

    @property
    def report(self) -> ExportTable:
        return self.sheets[REPORT_SHEET]

    @property
    def data(self) -> ExportTable:
        return self.sheets[DATA_SHEET]
