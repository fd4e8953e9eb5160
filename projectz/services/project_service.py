# Rev 0.2.0

"""Project service (Rev 0.2.0)
Adds existence checks on top of the project DAO: update/delete read the row
first so a missing id fails with ProjectNotFoundError before any write.
"""
from __future__ import annotations
from typing import List, Optional, Protocol

from projectz.models.entities import Project
from projectz.models.errors import ProjectNotFoundError


class ProjectRepository(Protocol):
    def insert_project(self, project: Project) -> Project: ...
    def fetch_all_projects(self) -> List[Project]: ...
    def fetch_project_by_id(self, project_id: int) -> Optional[Project]: ...
    def update_project(self, project: Project) -> bool: ...
    def delete_project(self, project_id: int) -> bool: ...


class ProjectService:
    def __init__(self, repo: ProjectRepository):
        self._repo = repo

    def add_project(self, project: Project) -> Project:
        return self._repo.insert_project(project)

    def fetch_all_projects(self) -> List[Project]:
        return self._repo.fetch_all_projects()

    def fetch_project_by_id(self, project_id: int) -> Project:
        project = self._repo.fetch_project_by_id(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    def update_project(self, project: Project) -> bool:
        self.fetch_project_by_id(project.project_id)
        return self._repo.update_project(project)

    def delete_project(self, project_id: int) -> bool:
        self.fetch_project_by_id(project_id)
        return self._repo.delete_project(project_id)
