# Rev 0.2.0
# Integration tests for SQLiteProjectRepository against the shipped migrations

from __future__ import annotations
import sqlite3
from datetime import datetime, time
from decimal import Decimal

import pytest

from projectz.models.entities import Project
from projectz.models.errors import DbError
from projectz.repositories.dao_base import DaoBase
from projectz.repositories.db import Database
from projectz.repositories.sqlite_project_repository import SQLiteProjectRepository


def _count(database: Database) -> int:
    con = database.connect()
    try:
        return con.execute("SELECT COUNT(*) FROM project").fetchone()[0]
    finally:
        con.close()


def test_migrations_create_project_table(database):
    assert "0001_create_project.sql" in database.applied()
    assert database.pending() == []
    con = database.connect()
    try:
        cols = [r["name"] for r in con.execute("PRAGMA table_info(project)")]
    finally:
        con.close()
    assert cols == ["project_id", "project_name", "estimated_hours", "actual_hours", "difficulty", "notes"]


def test_run_migrations_is_idempotent(database):
    assert database.run_migrations() == []


def test_insert_assigns_id_and_round_trips(repo, make_project):
    project = make_project()
    assert project.project_id is None

    saved = repo.insert_project(project)
    assert saved is project
    assert saved.project_id == 1

    fetched = repo.fetch_project_by_id(saved.project_id)
    assert fetched == Project(
        project_id=1,
        project_name="Demo",
        estimated_hours=Decimal("12.50"),
        actual_hours=Decimal("10.00"),
        difficulty=4,
        notes="n",
    )
    assert isinstance(fetched.estimated_hours, Decimal)


def test_nullable_fields_round_trip_as_none(repo):
    saved = repo.insert_project(Project(project_name="Bare"))
    fetched = repo.fetch_project_by_id(saved.project_id)
    assert fetched == Project(project_id=saved.project_id, project_name="Bare")


def test_fetch_all_is_ordered_by_name(repo, make_project):
    for name in ("Kitchen", "Attic", "Shed", "Deck"):
        repo.insert_project(make_project(name))
    names = [p.project_name for p in repo.fetch_all_projects()]
    assert names == ["Attic", "Deck", "Kitchen", "Shed"]
    assert all(p.project_id is not None for p in repo.fetch_all_projects())


def test_fetch_all_empty(repo):
    assert repo.fetch_all_projects() == []


def test_fetch_by_id_missing_returns_none(repo):
    assert repo.fetch_project_by_id(42) is None


def test_update_changes_all_mutable_columns(repo, make_project):
    saved = repo.insert_project(make_project())
    saved.project_name = "Renamed"
    saved.estimated_hours = Decimal("3.25")
    saved.actual_hours = None
    saved.difficulty = 1
    saved.notes = None

    assert repo.update_project(saved) is True
    assert repo.fetch_project_by_id(saved.project_id) == saved


def test_update_missing_row_returns_false(repo, make_project):
    repo.insert_project(make_project("Keep"))
    ghost = make_project("Ghost", project_id=99)
    assert repo.update_project(ghost) is False
    assert [p.project_name for p in repo.fetch_all_projects()] == ["Keep"]


def test_delete_returns_whether_row_matched(repo, make_project):
    saved = repo.insert_project(make_project())
    assert repo.delete_project(999) is False
    assert repo.delete_project(saved.project_id) is True
    assert repo.fetch_project_by_id(saved.project_id) is None


def test_delete_last_row_resets_auto_increment(repo, make_project):
    a = repo.insert_project(make_project("A"))
    b = repo.insert_project(make_project("B"))
    assert (a.project_id, b.project_id) == (1, 2)

    repo.delete_project(a.project_id)
    repo.delete_project(b.project_id)

    again = repo.insert_project(make_project("C"))
    assert again.project_id == 1


def test_delete_with_rows_left_keeps_counter(repo, make_project):
    for name in ("A", "B", "C"):
        repo.insert_project(make_project(name))
    repo.delete_project(3)
    # AUTOINCREMENT never reuses 3 while the table is non-empty
    assert repo.insert_project(make_project("D")).project_id == 4


def test_constraint_failure_rolls_back_and_wraps(repo, database):
    with pytest.raises(DbError) as ei:
        repo.insert_project(Project(project_name=None, difficulty=2))
    assert isinstance(ei.value.__cause__, sqlite3.IntegrityError)
    assert _count(database) == 0


def test_failure_after_insert_is_rolled_back(database, make_project, monkeypatch):
    repo = SQLiteProjectRepository(database)

    def boom(conn):
        raise sqlite3.OperationalError("lost the key")

    monkeypatch.setattr(repo, "last_insert_id", boom)
    project = make_project()
    with pytest.raises(DbError, match="lost the key"):
        repo.insert_project(project)
    assert project.project_id is None
    assert _count(database) == 0


def test_unreachable_database_is_a_db_error(tmp_path):
    # a directory is not a database file
    repo = SQLiteProjectRepository(Database(tmp_path))
    with pytest.raises(DbError):
        repo.fetch_all_projects()


def test_wrong_value_type_is_a_db_error(repo, make_project):
    with pytest.raises(DbError):
        repo.insert_project(make_project(difficulty="hard"))


@pytest.mark.parametrize(
    "value,field_type,expected",
    [
        (None, int, None),
        (None, Decimal, None),
        (5, int, 5),
        ("x", str, "x"),
        (1.5, float, 1.5),
        (Decimal("12.50"), Decimal, "12.50"),
        (time(9, 30), time, "09:30:00"),
        (datetime(2024, 1, 2, 3, 4, 5), datetime, "2024-01-02 03:04:05"),
    ],
)
def test_bind_table(value, field_type, expected):
    assert DaoBase.bind(value, field_type) == expected


@pytest.mark.parametrize("value,field_type", [(None, list), (True, int), ("5", int), (5, Decimal)])
def test_bind_rejects_unsupported(value, field_type):
    with pytest.raises(DbError):
        DaoBase.bind(value, field_type)


def test_last_insert_id_is_per_connection(database, make_project):
    dao = DaoBase(database)
    with dao.transaction() as con:
        con.execute("INSERT INTO project (project_name) VALUES (?)", ("x",))
        assert dao.last_insert_id(con) == 1


def test_hours_read_back_with_two_places(repo, make_project):
    saved = repo.insert_project(make_project())
    fetched = repo.fetch_project_by_id(saved.project_id)
    assert str(fetched.estimated_hours) == "12.50"
    assert str(fetched.actual_hours) == "10.00"
    assert [str(p.actual_hours) for p in repo.fetch_all_projects()] == ["10.00"]


def test_largest_hours_round_trip_exactly(repo, make_project):
    saved = repo.insert_project(make_project(estimated_hours=Decimal("99999.99"), actual_hours=Decimal("-0.01")))
    fetched = repo.fetch_project_by_id(saved.project_id)
    assert str(fetched.estimated_hours) == "99999.99"
    assert str(fetched.actual_hours) == "-0.01"


@pytest.mark.parametrize(
    "hours",
    [Decimal("100000.00"), Decimal("12345678901234567.89"), Decimal("1.234"), Decimal("NaN")],
)
def test_hours_that_do_not_fit_decimal_7_2_are_refused(repo, database, make_project, hours):
    with pytest.raises(DbError):
        repo.insert_project(make_project(estimated_hours=hours))
    assert _count(database) == 0


def test_update_with_oversized_hours_leaves_row(repo, make_project):
    saved = repo.insert_project(make_project())
    saved.actual_hours = Decimal("123456.00")
    with pytest.raises(DbError):
        repo.update_project(saved)
    assert repo.fetch_project_by_id(saved.project_id).actual_hours == Decimal("10.00")


def test_fetch_all_orders_names_case_insensitively(repo, make_project):
    for name in ("banana", "Cherry", "apple"):
        repo.insert_project(make_project(name))
    assert [p.project_name for p in repo.fetch_all_projects()] == ["apple", "banana", "Cherry"]


@pytest.mark.parametrize(
    "value,expected",
    [(Decimal("12.5"), "12.50"), (Decimal("10"), "10.00"), (Decimal("-99999.99"), "-99999.99")],
)
def test_bind_decimal_with_precision_scales(value, expected):
    assert DaoBase.bind(value, Decimal, precision=7, scale=2) == expected
