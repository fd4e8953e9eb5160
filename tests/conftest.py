# Rev 0.2.0

"""Pytest fixtures for projectZ (Rev 0.2.0)"""
from __future__ import annotations
from decimal import Decimal
import pytest
from pathlib import Path
from projectz.models.entities import Project
from projectz.repositories.db import Database
from projectz.repositories.sqlite_project_repository import SQLiteProjectRepository
from projectz.services.project_service import ProjectService


@pytest.fixture()
def database(tmp_path: Path) -> Database:
    db = Database(path=tmp_path / "test.db")
    db.run_migrations()
    return db


@pytest.fixture()
def repo(database: Database) -> SQLiteProjectRepository:
    return SQLiteProjectRepository(database)


@pytest.fixture()
def service(repo: SQLiteProjectRepository) -> ProjectService:
    return ProjectService(repo)


@pytest.fixture()
def make_project():
    def _make(name: str = "Demo", **overrides) -> Project:
        values = dict(
            project_name=name,
            estimated_hours=Decimal("12.50"),
            actual_hours=Decimal("10.00"),
            difficulty=4,
            notes="n",
        )
        values.update(overrides)
        return Project(**values)
    return _make
