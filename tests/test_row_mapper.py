# Rev 0.2.0

from __future__ import annotations
import sqlite3
from dataclasses import dataclass
from datetime import datetime, time
from decimal import Decimal
from typing import Optional

import pytest

from projectz.models.entities import Project
from projectz.models.errors import RowMappingError
from projectz.models.row_mapper import RowMapper, camel_to_snake, row_mapper_for


@dataclass
class ProjectWithExtra:
    project_id: Optional[int] = None
    project_name: Optional[str] = None
    difficulty: Optional[int] = None
    owner: Optional[str] = None          # never selected


@dataclass
class Shift:
    shiftId: Optional[int] = None
    startTime: Optional[time] = None
    clockedInAt: Optional[datetime] = None
    rate: Optional[float] = None


@dataclass
class WithDefault:
    label: Optional[str] = "unlabelled"


@dataclass
class Unsupported:
    tags: Optional[list] = None


@dataclass
class NeedsArgs:
    project_id: int


@pytest.fixture()
def con():
    c = sqlite3.connect(":memory:")
    try:
        yield c
    finally:
        c.close()


@pytest.mark.parametrize(
    "field,column",
    [
        ("projectName", "project_name"),
        ("estimatedHours", "estimated_hours"),
        ("project_name", "project_name"),
        ("notes", "notes"),
        ("ProjectId", "project_id"),
    ],
)
def test_camel_to_snake(field, column):
    assert camel_to_snake(field) == column


def test_missing_columns_leave_defaults(con):
    cur = con.execute("SELECT 7 AS project_id, 'X' AS project_name, 3 AS difficulty")
    obj = RowMapper(ProjectWithExtra).map_one(cur)
    assert obj == ProjectWithExtra(project_id=7, project_name="X", difficulty=3, owner=None)


def test_unknown_columns_are_ignored(con):
    cur = con.execute("SELECT 1 AS project_id, 'ignored' AS something_else")
    obj = row_mapper_for(Project).map_one(cur)
    assert obj.project_id == 1
    assert obj.project_name is None


def test_null_keeps_field_default(con):
    cur = con.execute("SELECT NULL AS label")
    assert RowMapper(WithDefault).map_one(cur).label == "unlabelled"


def test_camel_case_fields_time_and_timestamp(con):
    cur = con.execute(
        "SELECT 5 AS shift_id, '09:30:00' AS start_time, '2024-03-01 08:15:00' AS clocked_in_at, 21.5 AS rate"
    )
    shift = RowMapper(Shift).map_one(cur)
    assert shift.shiftId == 5
    assert shift.startTime == time(9, 30)
    assert shift.clockedInAt == datetime(2024, 3, 1, 8, 15)
    assert shift.rate == 21.5


def test_decimal_from_numeric_storage(con):
    cur = con.execute("SELECT 12.5 AS estimated_hours, 10 AS actual_hours")
    p = row_mapper_for(Project).map_one(cur)
    assert p.estimated_hours == Decimal("12.50")
    assert isinstance(p.actual_hours, Decimal)


def test_map_many_and_empty(con):
    con.execute("CREATE TABLE t (project_id INTEGER, project_name TEXT)")
    con.executemany("INSERT INTO t VALUES (?, ?)", [(1, "a"), (2, "b")])
    mapper = row_mapper_for(Project)
    assert [p.project_name for p in mapper.map_many(con.execute("SELECT * FROM t ORDER BY project_id"))] == ["a", "b"]
    assert mapper.map_one(con.execute("SELECT * FROM t WHERE project_id = 99")) is None


def test_unsupported_field_type_is_fatal():
    with pytest.raises(RowMappingError):
        RowMapper(Unsupported)


def test_non_dataclass_is_rejected():
    with pytest.raises(RowMappingError):
        RowMapper(dict)


def test_instantiation_failure_is_fatal(con):
    cur = con.execute("SELECT 1 AS project_id")
    with pytest.raises(RowMappingError):
        RowMapper(NeedsArgs).map_one(cur)


def test_bad_value_is_fatal(con):
    cur = con.execute("SELECT 'not-a-number' AS estimated_hours")
    with pytest.raises(RowMappingError):
        row_mapper_for(Project).map_one(cur)


def test_mapper_is_cached():
    assert row_mapper_for(Project) is row_mapper_for(Project)
    assert row_mapper_for(Project).columns == [
        "project_id", "project_name", "estimated_hours", "actual_hours", "difficulty", "notes",
    ]


@pytest.mark.parametrize(
    "sql",
    [
        "SELECT 'seven' AS project_id",
        "SELECT 42 AS project_name",
        "SELECT 2.5 AS difficulty",
    ],
)
def test_mismatched_column_type_is_fatal(con, sql):
    with pytest.raises(RowMappingError):
        row_mapper_for(Project).map_one(con.execute(sql))


def test_float_field_accepts_integer_column(con):
    shift = RowMapper(Shift).map_one(con.execute("SELECT 20 AS rate"))
    assert shift.rate == 20.0
    assert isinstance(shift.rate, float)
