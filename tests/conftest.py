from __future__ import annotations

import datetime as dt
from typing import List

import pytest

from worktime.config import Settings
from worktime.durations import DurationEngine
from worktime.exports import ExportTableBuilder
from worktime.schemas import Project, ReportRow, Task, TimeRegistration

FIXED_NOW = dt.datetime(2023, 1, 4, 15, 0, 0)


class FixedClock:
    def __init__(self, now: dt.datetime) -> None:
        self.now = now
        self.calls = 0

    def __call__(self) -> dt.datetime:
        self.calls += 1
        return self.now


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(FIXED_NOW)


@pytest.fixture()
def engine(clock: FixedClock) -> DurationEngine:
    return DurationEngine(clock=clock)


@pytest.fixture()
def builder(engine: DurationEngine) -> ExportTableBuilder:
    return ExportTableBuilder(engine)


@pytest.fixture()
def project() -> Project:
    return Project(name="Website", comment="Customer relaunch")


@pytest.fixture()
def task(project: Project) -> Task:
    return Task(name="Design", project=project)


@pytest.fixture()
def registrations(task: Task) -> List[TimeRegistration]:
    return [
        TimeRegistration(
            start_time=dt.datetime(2023, 1, 1, 9, 0, 0),
            end_time=dt.datetime(2023, 1, 1, 10, 30, 45),
            comment="Wireframes",
            task=task,
        ),
        TimeRegistration(
            start_time=dt.datetime(2023, 1, 4, 13, 15, 20),
            end_time=None,
            comment="   ",
            task=Task(name="Review", project=Project(name="Intranet")),
        ),
    ]


@pytest.fixture()
def report_rows() -> List[ReportRow]:
    return [
        ReportRow(column1="Project", column2="Task", column3="", column_total="Total"),
        ReportRow(column1="Website", column2="Design", column3="", column_total="01h 30m"),
        ReportRow(column1="Intranet", column2="Review", column3="", column_total="01h 44m"),
    ]


@pytest.fixture()
def export_settings(tmp_path) -> Settings:
    return Settings(export_dir=tmp_path / "exports", _env_file=None)
