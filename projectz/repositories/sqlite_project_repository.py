# Rev 0.2.0
# projectZ – SQLiteProjectRepository (Rev 0.2.0)
from __future__ import annotations
from decimal import Decimal
from typing import List, Optional

from projectz.models.entities import Project
from projectz.models.row_mapper import row_mapper_for
from projectz.models.types import HOURS_PRECISION, HOURS_SCALE
from .dao_base import DaoBase

PROJECT_TABLE = "project"


class SQLiteProjectRepository(DaoBase):
    """
    Project CRUD against the single `project` table.
    One connection + one transaction per call; failures surface as DbError.
    """

    def __init__(self, db) -> None:
        super().__init__(db)
        self._mapper = row_mapper_for(Project)

    # ---------- public API ----------

    def insert_project(self, project: Project) -> Project:
        sql = f"""
            INSERT INTO {PROJECT_TABLE}
                (project_name, estimated_hours, actual_hours, difficulty, notes)
            VALUES (?, ?, ?, ?, ?)
        """
        params = self._mutable_params(project)
        with self.transaction() as con:
            con.execute(sql, params)
            project_id = self.last_insert_id(con)
        project.project_id = project_id
        self._log.info("Inserted project %s (%s)", project_id, project.project_name)
        return project

    def fetch_all_projects(self) -> List[Project]:
        sql = f"SELECT * FROM {PROJECT_TABLE} ORDER BY project_name COLLATE NOCASE, project_id"
        with self.transaction() as con:
            projects = self._mapper.map_many(con.execute(sql))
        self._log.debug("Fetched %d projects", len(projects))
        return projects

    def fetch_project_by_id(self, project_id: int) -> Optional[Project]:
        sql = f"SELECT * FROM {PROJECT_TABLE} WHERE project_id = ?"
        with self.transaction() as con:
            return self._mapper.map_one(con.execute(sql, (self.bind(project_id, int),)))

    def update_project(self, project: Project) -> bool:
        sql = f"""
            UPDATE {PROJECT_TABLE}
            SET project_name = ?, estimated_hours = ?, actual_hours = ?, difficulty = ?, notes = ?
            WHERE project_id = ?
        """
        params = self._mutable_params(project) + (self.bind(project.project_id, int),)
        with self.transaction() as con:
            updated = con.execute(sql, params).rowcount > 0
        self._log.debug("Update project %s -> %s", project.project_id, updated)
        return updated

    def delete_project(self, project_id: int) -> bool:
        with self.transaction() as con:
            cur = con.execute(
                f"DELETE FROM {PROJECT_TABLE} WHERE project_id = ?",
                (self.bind(project_id, int),),
            )
            deleted = cur.rowcount > 0
            (remaining,) = con.execute(f"SELECT COUNT(*) FROM {PROJECT_TABLE}").fetchone()
            if remaining == 0:
                # empty table -> next insert gets id 1 again
                con.execute("DELETE FROM sqlite_sequence WHERE name = ?", (PROJECT_TABLE,))
        self._log.info("Delete project %s -> %s (remaining=%d)", project_id, deleted, remaining)
        return deleted

    # ---------- internals ----------

    def _mutable_params(self, project: Project) -> tuple:
        return (
            self.bind(project.project_name, str),
            self.bind(project.estimated_hours, Decimal, precision=HOURS_PRECISION, scale=HOURS_SCALE),
            self.bind(project.actual_hours, Decimal, precision=HOURS_PRECISION, scale=HOURS_SCALE),
            self.bind(project.difficulty, int),
            self.bind(project.notes, str),
        )
